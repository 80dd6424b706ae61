"""SQLite implementation of finance record storage."""

import json
from datetime import date, datetime

import aiosqlite

from almacen.config import get_logger
from almacen.core.entities.finance import (
    CategoryUsage,
    FinanceRecord,
    FinanceType,
    PaymentMethod,
    RecurrenceFrequency,
    RecurringConfig,
    SourceType,
)
from almacen.core.exceptions import ConflictError, DatabaseError, FinanceRecordNotFoundError
from almacen.core.interfaces.finance_store import IFinanceStore
from almacen.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


def _parse_date(value: str | None, column: str) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError) as e:
        raise DatabaseError("read", f"unreadable {column} date {value!r}") from e


def _parse_dt(value: str, column: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError) as e:
        raise DatabaseError("read", f"unreadable {column} timestamp {value!r}") from e


class SQLiteFinanceStore(IFinanceStore):
    """SQLite implementation of finance record storage."""

    @staticmethod
    def _columns(record: FinanceRecord) -> tuple:
        config = record.recurring_config if record.is_recurring else None
        return (
            record.type.value,
            record.category,
            record.subcategory,
            record.description,
            record.amount,
            record.record_date.isoformat(),
            record.payment_method.value,
            record.reference,
            record.notes,
            json.dumps(record.tags, ensure_ascii=False),
            record.source_type.value,
            record.source_id,
            1 if record.is_recurring else 0,
            config.frequency.value if config and config.frequency else None,
            _iso(config.next_date) if config else None,
            _iso(config.end_date) if config else None,
            (1 if config.is_active else 0) if config else None,
        )

    async def create_record(self, record: FinanceRecord) -> FinanceRecord:
        """Create a new finance record."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO finance_records (
                    type, category, subcategory, description, amount, record_date,
                    payment_method, reference, notes, tags, source_type, source_id,
                    is_recurring, recurring_frequency, recurring_next_date,
                    recurring_end_date, recurring_active, version, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 0, ?, ?)
                """,
                (
                    *self._columns(record),
                    record.created_at.isoformat(),
                    record.updated_at.isoformat(),
                ),
            )
            record_id = cursor.lastrowid

        logger.info(
            "finance_record_created",
            record_id=record_id,
            type=record.type.value,
            category=record.category,
            amount=record.amount,
        )
        return record.model_copy(update={"id": record_id, "version": 0})

    async def get_record(self, record_id: int) -> FinanceRecord | None:
        """Get finance record by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM finance_records WHERE id = ?", (record_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    async def update_record(
        self, record: FinanceRecord, expected_version: int
    ) -> FinanceRecord:
        """Replace every mutable column if the version still matches."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE finance_records SET
                    type = ?, category = ?, subcategory = ?, description = ?,
                    amount = ?, record_date = ?, payment_method = ?, reference = ?,
                    notes = ?, tags = ?, source_type = ?, source_id = ?,
                    is_recurring = ?, recurring_frequency = ?, recurring_next_date = ?,
                    recurring_end_date = ?, recurring_active = ?,
                    updated_at = ?, version = version + 1
                WHERE id = ? AND version = ?
                """,
                (
                    *self._columns(record),
                    record.updated_at.isoformat(),
                    record.id,
                    expected_version,
                ),
            )
            if cursor.rowcount == 0:
                cursor = await conn.execute(
                    "SELECT 1 FROM finance_records WHERE id = ?", (record.id,)
                )
                if await cursor.fetchone() is None:
                    raise FinanceRecordNotFoundError(record.id)
                logger.warning(
                    "finance_record_version_conflict",
                    record_id=record.id,
                    expected_version=expected_version,
                )
                raise ConflictError("FinanceRecord", record.id, expected_version)

        logger.info("finance_record_updated", record_id=record.id)
        return record.model_copy(update={"version": expected_version + 1})

    async def delete_record(self, record_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM finance_records WHERE id = ?", (record_id,)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("finance_record_deleted", record_id=record_id)
        return deleted

    async def list_records(self, type: FinanceType | None = None) -> list[FinanceRecord]:
        """Records in insertion order."""
        async with get_connection() as conn:
            if type is None:
                cursor = await conn.execute("SELECT * FROM finance_records ORDER BY id")
            else:
                cursor = await conn.execute(
                    "SELECT * FROM finance_records WHERE type = ? ORDER BY id",
                    (type.value,),
                )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def list_categories(self, type: FinanceType | None = None) -> list[CategoryUsage]:
        """Distinct categories (alphabetical) with their subcategories."""
        query = "SELECT DISTINCT category, subcategory FROM finance_records"
        params: tuple = ()
        if type is not None:
            query += " WHERE type = ?"
            params = (type.value,)
        query += " ORDER BY category, subcategory"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()

        usage: dict[str, list[str]] = {}
        for row in rows:
            subcategories = usage.setdefault(row["category"], [])
            sub = row["subcategory"]
            if sub and sub.strip() and sub not in subcategories:
                subcategories.append(sub)

        return [CategoryUsage(category=c, subcategories=s) for c, s in usage.items()]

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> FinanceRecord:
        """Convert a database row to a FinanceRecord entity."""
        try:
            tags = json.loads(row["tags"]) if row["tags"] else []
        except json.JSONDecodeError:
            tags = []

        config = None
        if row["is_recurring"]:
            frequency = row["recurring_frequency"]
            config = RecurringConfig(
                frequency=RecurrenceFrequency(frequency) if frequency else None,
                next_date=_parse_date(row["recurring_next_date"], "recurring_next_date"),
                end_date=_parse_date(row["recurring_end_date"], "recurring_end_date"),
                is_active=bool(row["recurring_active"])
                if row["recurring_active"] is not None
                else True,
            )

        record_date = _parse_date(row["record_date"], "record_date")
        if record_date is None:
            raise DatabaseError("read", f"finance record {row['id']} has no record_date")

        return FinanceRecord(
            id=row["id"],
            type=FinanceType(row["type"]),
            category=row["category"],
            subcategory=row["subcategory"],
            description=row["description"],
            amount=float(row["amount"]),
            record_date=record_date,
            payment_method=PaymentMethod(row["payment_method"]),
            reference=row["reference"],
            notes=row["notes"],
            tags=tags,
            source_type=SourceType(row["source_type"]),
            source_id=row["source_id"],
            is_recurring=bool(row["is_recurring"]),
            recurring_config=config,
            version=row["version"],
            created_at=_parse_dt(row["created_at"], "created_at"),
            updated_at=_parse_dt(row["updated_at"], "updated_at"),
        )
