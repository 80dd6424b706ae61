"""SQLite implementation of part and stock movement storage."""

from datetime import datetime

import aiosqlite

from almacen.config import get_logger
from almacen.core.entities.part import (
    MovementType,
    Part,
    PartCategory,
    StockMovement,
    Supplier,
    Unit,
)
from almacen.core.exceptions import ConflictError, DatabaseError, PartNotFoundError
from almacen.core.interfaces.part_store import IPartStore
from almacen.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


def _parse_dt(value: str | None, column: str) -> datetime:
    try:
        return datetime.fromisoformat(value)  # type: ignore[arg-type]
    except (ValueError, TypeError) as e:
        raise DatabaseError("read", f"unreadable {column} timestamp {value!r}") from e


class SQLitePartStore(IPartStore):
    """
    SQLite implementation of part storage.

    parts.version is bumped by every write; writers pass the version they
    read and lose with ConflictError if someone else got there first.
    """

    async def create_part(self, part: Part) -> Part:
        """Insert a part and its opening movements in one transaction."""
        async with get_transaction() as conn:
            supplier = part.supplier or Supplier()
            cursor = await conn.execute(
                """
                INSERT INTO parts (
                    name, part_number, category, warehouse_id,
                    current_stock, minimum_stock, maximum_stock, unit, unit_price,
                    supplier_name, supplier_contact, supplier_phone, supplier_email,
                    location, description, notes, version, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 0, ?, ?)
                """,
                (
                    part.name,
                    part.part_number,
                    part.category.value,
                    part.warehouse_id,
                    part.current_stock,
                    part.minimum_stock,
                    part.maximum_stock,
                    part.unit.value,
                    part.unit_price,
                    supplier.name,
                    supplier.contact,
                    supplier.phone,
                    supplier.email,
                    part.location,
                    part.description,
                    part.notes,
                    part.created_at.isoformat(),
                    part.updated_at.isoformat(),
                ),
            )
            part_id = cursor.lastrowid

            movements = []
            for movement in part.movements:
                movements.append(await self._insert_movement(conn, part_id, movement))

        created = part.model_copy(update={"id": part_id, "version": 0, "movements": movements})
        logger.info(
            "part_created",
            part_id=part_id,
            part_number=created.part_number,
            warehouse_id=created.warehouse_id,
            current_stock=created.current_stock,
        )
        return created

    async def get_part(self, part_id: int, with_movements: bool = True) -> Part | None:
        """Get part by ID, with its full history in append order."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM parts WHERE id = ?", (part_id,))
            row = await cursor.fetchone()
            if row is None:
                return None

            movements: list[StockMovement] = []
            if with_movements:
                cursor = await conn.execute(
                    "SELECT * FROM stock_movements WHERE part_id = ? ORDER BY id",
                    (part_id,),
                )
                movements = [self._row_to_movement(r) for r in await cursor.fetchall()]

            return self._row_to_part(row, movements)

    async def update_part(self, part: Part, expected_version: int) -> Part:
        """Write non-stock fields if the stored version still matches."""
        supplier = part.supplier or Supplier()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE parts SET
                    name = ?, part_number = ?, category = ?, warehouse_id = ?,
                    minimum_stock = ?, maximum_stock = ?, unit = ?, unit_price = ?,
                    supplier_name = ?, supplier_contact = ?, supplier_phone = ?,
                    supplier_email = ?, location = ?, description = ?, notes = ?,
                    updated_at = ?, version = version + 1
                WHERE id = ? AND version = ?
                """,
                (
                    part.name,
                    part.part_number,
                    part.category.value,
                    part.warehouse_id,
                    part.minimum_stock,
                    part.maximum_stock,
                    part.unit.value,
                    part.unit_price,
                    supplier.name,
                    supplier.contact,
                    supplier.phone,
                    supplier.email,
                    part.location,
                    part.description,
                    part.notes,
                    part.updated_at.isoformat(),
                    part.id,
                    expected_version,
                ),
            )
            if cursor.rowcount == 0:
                await self._raise_lost_write(conn, part.id, expected_version)

        logger.info("part_updated", part_id=part.id, version=expected_version + 1)
        return part.model_copy(update={"version": expected_version + 1})

    async def append_movement(
        self, part: Part, movement: StockMovement, expected_version: int
    ) -> tuple[Part, StockMovement]:
        """
        Set current_stock and insert the movement row together.

        The stock update is a compare-and-swap on version; when it matches
        nothing, the transaction rolls back and no movement is stored.
        """
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE parts SET
                    current_stock = ?, updated_at = ?, version = version + 1
                WHERE id = ? AND version = ?
                """,
                (
                    movement.new_stock,
                    movement.moved_at.isoformat(),
                    part.id,
                    expected_version,
                ),
            )
            if cursor.rowcount == 0:
                await self._raise_lost_write(conn, part.id, expected_version)

            stored = await self._insert_movement(conn, part.id, movement)

        # Swap the unsaved trailing movement for the stored one
        history = list(part.movements)
        if history and history[-1] is movement:
            history[-1] = stored
        else:
            history.append(stored)

        updated = part.model_copy(
            update={
                "current_stock": stored.new_stock,
                "movements": history,
                "updated_at": stored.moved_at,
                "version": expected_version + 1,
            }
        )
        logger.info(
            "stock_movement_applied",
            part_id=part.id,
            movement_id=stored.id,
            type=stored.movement_type.value,
            qty=stored.quantity,
            previous_stock=stored.previous_stock,
            new_stock=stored.new_stock,
        )
        return updated, stored

    async def delete_part(self, part_id: int) -> bool:
        """Delete a part and its movement history in one transaction."""
        async with get_transaction() as conn:
            await conn.execute("DELETE FROM stock_movements WHERE part_id = ?", (part_id,))
            cursor = await conn.execute("DELETE FROM parts WHERE id = ?", (part_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("part_deleted", part_id=part_id)
        return deleted

    async def list_parts(
        self,
        warehouse_id: int | None = None,
        category: PartCategory | None = None,
    ) -> list[Part]:
        """Parts in insertion order, optionally narrowed in SQL."""
        query = "SELECT * FROM parts WHERE 1=1"
        params: list = []
        if warehouse_id is not None:
            query += " AND warehouse_id = ?"
            params.append(warehouse_id)
        if category is not None:
            query += " AND category = ?"
            params.append(category.value)
        query += " ORDER BY id"

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_part(row) for row in rows]

    async def get_movements(
        self, part_id: int, limit: int = 100, offset: int = 0
    ) -> list[StockMovement]:
        """Get movements for a part, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_movements
                WHERE part_id = ?
                ORDER BY id DESC
                LIMIT ? OFFSET ?
                """,
                (part_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    @staticmethod
    async def _insert_movement(
        conn: aiosqlite.Connection, part_id: int, movement: StockMovement
    ) -> StockMovement:
        cursor = await conn.execute(
            """
            INSERT INTO stock_movements (
                part_id, movement_type, quantity, reason, reference,
                previous_stock, new_stock, moved_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                part_id,
                movement.movement_type.value,
                movement.quantity,
                movement.reason,
                movement.reference,
                movement.previous_stock,
                movement.new_stock,
                movement.moved_at.isoformat(),
            ),
        )
        return movement.model_copy(update={"id": cursor.lastrowid, "part_id": part_id})

    @staticmethod
    async def _raise_lost_write(
        conn: aiosqlite.Connection, part_id: int, expected_version: int
    ) -> None:
        cursor = await conn.execute("SELECT version FROM parts WHERE id = ?", (part_id,))
        row = await cursor.fetchone()
        if row is None:
            raise PartNotFoundError(part_id)
        logger.warning(
            "part_version_conflict",
            part_id=part_id,
            expected_version=expected_version,
            stored_version=row["version"],
        )
        raise ConflictError("Part", part_id, expected_version)

    @staticmethod
    def _row_to_part(row: aiosqlite.Row, movements: list[StockMovement] | None = None) -> Part:
        """Convert a database row to a Part entity."""
        supplier = None
        supplier_fields = {
            "name": row["supplier_name"],
            "contact": row["supplier_contact"],
            "phone": row["supplier_phone"],
            "email": row["supplier_email"],
        }
        if any(v is not None for v in supplier_fields.values()):
            supplier = Supplier(**supplier_fields)

        return Part(
            id=row["id"],
            name=row["name"],
            part_number=row["part_number"],
            category=PartCategory(row["category"]),
            warehouse_id=row["warehouse_id"],
            current_stock=float(row["current_stock"]),
            minimum_stock=float(row["minimum_stock"]),
            maximum_stock=(
                float(row["maximum_stock"]) if row["maximum_stock"] is not None else None
            ),
            unit=Unit(row["unit"]),
            unit_price=float(row["unit_price"]) if row["unit_price"] is not None else None,
            supplier=supplier,
            location=row["location"],
            description=row["description"],
            notes=row["notes"],
            movements=movements or [],
            version=row["version"],
            created_at=_parse_dt(row["created_at"], "created_at"),
            updated_at=_parse_dt(row["updated_at"], "updated_at"),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> StockMovement:
        """Convert a database row to a StockMovement entity."""
        return StockMovement(
            id=row["id"],
            part_id=row["part_id"],
            movement_type=MovementType(row["movement_type"]),
            quantity=float(row["quantity"]),
            reason=row["reason"],
            reference=row["reference"],
            previous_stock=float(row["previous_stock"]),
            new_stock=float(row["new_stock"]),
            moved_at=_parse_dt(row["moved_at"], "moved_at"),
        )
