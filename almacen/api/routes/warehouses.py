"""Warehouse endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from almacen.api.dependencies import (
    get_create_warehouse_use_case,
    get_delete_warehouse_use_case,
    get_get_warehouse_use_case,
    get_list_warehouses_use_case,
)
from almacen.application.dto.requests import CreateWarehouseRequest
from almacen.application.dto.responses import (
    ErrorResponse,
    WarehouseListResponse,
    WarehouseResponse,
)
from almacen.application.use_cases import (
    CreateWarehouseUseCase,
    DeleteWarehouseUseCase,
    GetWarehouseUseCase,
    ListWarehousesUseCase,
)

router = APIRouter(prefix="/api/warehouses", tags=["warehouses"])


@router.post(
    "",
    response_model=WarehouseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_warehouse(
    request: CreateWarehouseRequest,
    use_case: CreateWarehouseUseCase = Depends(get_create_warehouse_use_case),
) -> WarehouseResponse:
    warehouse = await use_case.execute(request)
    return use_case.to_response(warehouse)


@router.get("", response_model=WarehouseListResponse)
async def list_warehouses(
    department: str | None = None,
    search: str | None = Query(default=None, max_length=100),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    use_case: ListWarehousesUseCase = Depends(get_list_warehouses_use_case),
) -> WarehouseListResponse:
    """List warehouses, newest first."""
    warehouses = await use_case.execute(
        department=department, search=search, limit=limit, offset=offset
    )
    return use_case.to_list_response(warehouses)


@router.get(
    "/{warehouse_id}",
    response_model=WarehouseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_warehouse(
    warehouse_id: int,
    use_case: GetWarehouseUseCase = Depends(get_get_warehouse_use_case),
) -> WarehouseResponse:
    warehouse = await use_case.execute(warehouse_id)
    return use_case.to_response(warehouse)


@router.delete(
    "/{warehouse_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_warehouse(
    warehouse_id: int,
    use_case: DeleteWarehouseUseCase = Depends(get_delete_warehouse_use_case),
) -> Response:
    """Delete a warehouse that holds no parts."""
    await use_case.execute(warehouse_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
