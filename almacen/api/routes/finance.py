"""Finance record endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Response, status

from almacen.api.dependencies import (
    get_create_finance_record_use_case,
    get_delete_finance_record_use_case,
    get_finance_filter,
    get_finance_stats_use_case,
    get_get_finance_record_use_case,
    get_list_finance_categories_use_case,
    get_list_finance_records_use_case,
    get_update_finance_record_use_case,
    parse_enum,
)
from almacen.application.dto.requests import (
    CreateFinanceRecordRequest,
    FinanceStatsRequest,
    UpdateFinanceRecordRequest,
)
from almacen.application.dto.responses import (
    ErrorResponse,
    FinanceCategoriesResponse,
    FinanceRecordListResponse,
    FinanceRecordResponse,
    FinanceStatsResponse,
)
from almacen.application.use_cases import (
    CreateFinanceRecordUseCase,
    DeleteFinanceRecordUseCase,
    GetFinanceRecordUseCase,
    GetFinanceStatsUseCase,
    ListFinanceCategoriesUseCase,
    ListFinanceRecordsUseCase,
    UpdateFinanceRecordUseCase,
)
from almacen.core.entities import FinanceFilter, FinanceType

router = APIRouter(prefix="/api/finance", tags=["finance"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get(
    "/stats",
    response_model=FinanceStatsResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_finance_stats(
    period: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    use_case: GetFinanceStatsUseCase = Depends(get_finance_stats_use_case),
) -> FinanceStatsResponse:
    """
    Totals and category breakdowns for a period, plus the monthly trend.

    period is day, week, month or year; start_date and end_date together
    override it with an inclusive range.
    """
    stats = await use_case.execute(
        FinanceStatsRequest(period=period, start_date=start_date, end_date=end_date)
    )
    return use_case.to_response(stats)


@router.get("/categories", response_model=FinanceCategoriesResponse)
async def list_finance_categories(
    type: str | None = None,
    use_case: ListFinanceCategoriesUseCase = Depends(get_list_finance_categories_use_case),
) -> FinanceCategoriesResponse:
    """Categories in use with subcategories, and the recommended lists."""
    result = await use_case.execute(parse_enum("type", type, FinanceType))
    return use_case.to_response(result)


@router.get(
    "",
    response_model=FinanceRecordListResponse,
    responses={400: {"model": ErrorResponse}},
)
async def list_finance_records(
    criteria: FinanceFilter = Depends(get_finance_filter),
    use_case: ListFinanceRecordsUseCase = Depends(get_list_finance_records_use_case),
) -> FinanceRecordListResponse:
    """List records, most recent date first, with page metadata."""
    page = await use_case.execute(criteria)
    return use_case.to_response(page)


@router.post(
    "",
    response_model=FinanceRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_finance_record(
    request: CreateFinanceRecordRequest,
    use_case: CreateFinanceRecordUseCase = Depends(get_create_finance_record_use_case),
) -> FinanceRecordResponse:
    record = await use_case.execute(request)
    return use_case.to_response(record)


@router.get("/{record_id}", response_model=FinanceRecordResponse, responses=NOT_FOUND)
async def get_finance_record(
    record_id: int,
    use_case: GetFinanceRecordUseCase = Depends(get_get_finance_record_use_case),
) -> FinanceRecordResponse:
    record = await use_case.execute(record_id)
    return use_case.to_response(record)


@router.put(
    "/{record_id}",
    response_model=FinanceRecordResponse,
    responses={**NOT_FOUND, 400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_finance_record(
    record_id: int,
    request: UpdateFinanceRecordRequest,
    use_case: UpdateFinanceRecordUseCase = Depends(get_update_finance_record_use_case),
) -> FinanceRecordResponse:
    record = await use_case.execute(record_id, request)
    return use_case.to_response(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_finance_record(
    record_id: int,
    use_case: DeleteFinanceRecordUseCase = Depends(get_delete_finance_record_use_case),
) -> Response:
    await use_case.execute(record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
