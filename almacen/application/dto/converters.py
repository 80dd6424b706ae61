"""Entity -> response DTO conversion shared by use cases."""

from almacen.application.dto.responses import (
    CategoryAmountResponse,
    CategoryStockSummaryResponse,
    FinanceRecordResponse,
    FinanceStatsResponse,
    FinanceSummaryResponse,
    MonthlyTrendPointResponse,
    PartResponse,
    PartStatsResponse,
    RecurringConfigResponse,
    StockMovementResponse,
    SupplierResponse,
    WarehouseResponse,
)
from almacen.core.entities import (
    FinanceRecord,
    FinanceStats,
    Part,
    PartStats,
    StockMovement,
    Warehouse,
)


def warehouse_to_response(warehouse: Warehouse) -> WarehouseResponse:
    return WarehouseResponse(
        id=warehouse.id,  # type: ignore[arg-type]
        name=warehouse.name,
        address=warehouse.address,
        department=warehouse.department,
        created_at=warehouse.created_at,
        updated_at=warehouse.updated_at,
    )


def movement_to_response(movement: StockMovement) -> StockMovementResponse:
    return StockMovementResponse(
        id=movement.id,  # type: ignore[arg-type]
        part_id=movement.part_id,  # type: ignore[arg-type]
        movement_type=movement.movement_type.value,
        quantity=movement.quantity,
        reason=movement.reason,
        reference=movement.reference,
        previous_stock=movement.previous_stock,
        new_stock=movement.new_stock,
        moved_at=movement.moved_at,
    )


def part_to_response(part: Part, include_movements: bool = False) -> PartResponse:
    """Convert a Part; movements are only included when asked for."""
    supplier = None
    if part.supplier is not None:
        supplier = SupplierResponse(**part.supplier.model_dump())

    return PartResponse(
        id=part.id,  # type: ignore[arg-type]
        name=part.name,
        part_number=part.part_number,
        category=part.category.value,
        warehouse_id=part.warehouse_id,
        current_stock=part.current_stock,
        minimum_stock=part.minimum_stock,
        maximum_stock=part.maximum_stock,
        unit=part.unit.value,
        unit_price=part.unit_price,
        supplier=supplier,
        location=part.location,
        description=part.description,
        notes=part.notes,
        status=part.status.value,
        stock_value=part.stock_value,
        version=part.version,
        created_at=part.created_at,
        updated_at=part.updated_at,
        movements=(
            [movement_to_response(m) for m in part.movements] if include_movements else []
        ),
    )


def part_stats_to_response(stats: PartStats) -> PartStatsResponse:
    return PartStatsResponse(
        total_parts=stats.total_parts,
        low_stock_parts=stats.low_stock_parts,
        out_of_stock_parts=stats.out_of_stock_parts,
        total_value=stats.total_value,
        parts_by_category=[
            CategoryStockSummaryResponse(**c.model_dump()) for c in stats.parts_by_category
        ],
    )


def record_to_response(record: FinanceRecord) -> FinanceRecordResponse:
    config = None
    if record.recurring_config is not None:
        rc = record.recurring_config
        config = RecurringConfigResponse(
            frequency=rc.frequency.value if rc.frequency else None,
            next_date=rc.next_date,
            end_date=rc.end_date,
            is_active=rc.is_active,
        )

    return FinanceRecordResponse(
        id=record.id,  # type: ignore[arg-type]
        type=record.type.value,
        category=record.category,
        subcategory=record.subcategory,
        description=record.description,
        amount=record.amount,
        record_date=record.record_date,
        payment_method=record.payment_method.value,
        reference=record.reference,
        notes=record.notes,
        tags=record.tags,
        source_type=record.source_type.value,
        source_id=record.source_id,
        is_recurring=record.is_recurring,
        recurring_config=config,
        version=record.version,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def finance_stats_to_response(stats: FinanceStats) -> FinanceStatsResponse:
    return FinanceStatsResponse(
        summary=FinanceSummaryResponse(**stats.summary.model_dump()),
        income_by_category=[
            CategoryAmountResponse(**c.model_dump()) for c in stats.income_by_category
        ],
        expenses_by_category=[
            CategoryAmountResponse(**c.model_dump()) for c in stats.expenses_by_category
        ],
        monthly_trend=[
            MonthlyTrendPointResponse(
                year=p.year, month=p.month, type=p.type.value, total=p.total
            )
            for p in stats.monthly_trend
        ],
    )
