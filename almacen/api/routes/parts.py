"""Part ledger endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from almacen.api.dependencies import (
    get_apply_stock_movement_use_case,
    get_create_part_use_case,
    get_delete_part_use_case,
    get_get_part_use_case,
    get_list_part_movements_use_case,
    get_list_parts_use_case,
    get_part_filter,
    get_part_stats_use_case,
    get_update_part_use_case,
)
from almacen.application.dto.requests import (
    CreatePartRequest,
    StockMovementRequest,
    UpdatePartRequest,
)
from almacen.application.dto.responses import (
    ErrorResponse,
    MovementListResponse,
    PartListResponse,
    PartResponse,
    PartStatsResponse,
    StockMovementResultResponse,
)
from almacen.application.use_cases import (
    ApplyStockMovementUseCase,
    CreatePartUseCase,
    DeletePartUseCase,
    GetPartStatsUseCase,
    GetPartUseCase,
    ListPartMovementsUseCase,
    ListPartsUseCase,
    UpdatePartUseCase,
)
from almacen.core.entities import PartFilter

router = APIRouter(prefix="/api/parts", tags=["parts"])

NOT_FOUND = {404: {"model": ErrorResponse}}


# Registered before /{part_id} so "stats" is not read as an id
@router.get("/stats", response_model=PartStatsResponse)
async def get_part_stats(
    criteria: PartFilter = Depends(get_part_filter),
    use_case: GetPartStatsUseCase = Depends(get_part_stats_use_case),
) -> PartStatsResponse:
    """Counts, stock value and category breakdown over the filtered parts."""
    stats = await use_case.execute(criteria)
    return use_case.to_response(stats)


@router.get(
    "",
    response_model=PartListResponse,
    responses={400: {"model": ErrorResponse}},
)
async def list_parts(
    criteria: PartFilter = Depends(get_part_filter),
    use_case: ListPartsUseCase = Depends(get_list_parts_use_case),
) -> PartListResponse:
    """List parts, newest first, with page metadata."""
    page = await use_case.execute(criteria)
    return use_case.to_response(page)


@router.post(
    "",
    response_model=PartResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_part(
    request: CreatePartRequest,
    use_case: CreatePartUseCase = Depends(get_create_part_use_case),
) -> PartResponse:
    """Create a part; its initial stock becomes the opening movement."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/{part_id}", response_model=PartResponse, responses=NOT_FOUND)
async def get_part(
    part_id: int,
    use_case: GetPartUseCase = Depends(get_get_part_use_case),
) -> PartResponse:
    part = await use_case.execute(part_id)
    return use_case.to_response(part)


@router.put(
    "/{part_id}",
    response_model=PartResponse,
    responses={**NOT_FOUND, 400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_part(
    part_id: int,
    request: UpdatePartRequest,
    use_case: UpdatePartUseCase = Depends(get_update_part_use_case),
) -> PartResponse:
    """Update non-stock fields."""
    part = await use_case.execute(part_id, request)
    return use_case.to_response(part)


@router.delete("/{part_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_part(
    part_id: int,
    use_case: DeletePartUseCase = Depends(get_delete_part_use_case),
) -> Response:
    """Delete a part and its movement history."""
    await use_case.execute(part_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{part_id}/stock",
    response_model=StockMovementResultResponse,
    responses={**NOT_FOUND, 400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def apply_stock_movement(
    part_id: int,
    request: StockMovementRequest,
    use_case: ApplyStockMovementUseCase = Depends(get_apply_stock_movement_use_case),
) -> StockMovementResultResponse:
    """Apply an Entrada, Salida, Ajuste or Transferencia."""
    result = await use_case.execute(part_id, request)
    return use_case.to_response(result)


@router.get("/{part_id}/movements", response_model=MovementListResponse, responses=NOT_FOUND)
async def list_part_movements(
    part_id: int,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    use_case: ListPartMovementsUseCase = Depends(get_list_part_movements_use_case),
) -> MovementListResponse:
    """Movement history, newest first."""
    movements = await use_case.execute(part_id, limit=limit, offset=offset)
    return use_case.to_response(part_id, movements)
