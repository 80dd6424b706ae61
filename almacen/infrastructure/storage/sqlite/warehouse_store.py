"""SQLite implementation of warehouse storage."""

from datetime import datetime

import aiosqlite

from almacen.config import get_logger
from almacen.core.entities.warehouse import Warehouse
from almacen.core.interfaces.warehouse_store import IWarehouseStore
from almacen.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteWarehouseStore(IWarehouseStore):
    """SQLite implementation of warehouse storage."""

    async def create(self, warehouse: Warehouse) -> Warehouse:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO warehouses (name, address, department, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    warehouse.name,
                    warehouse.address,
                    warehouse.department,
                    warehouse.created_at.isoformat(),
                    warehouse.updated_at.isoformat(),
                ),
            )
            warehouse_id = cursor.lastrowid

        logger.info("warehouse_created", warehouse_id=warehouse_id, name=warehouse.name)
        return warehouse.model_copy(update={"id": warehouse_id})

    async def get(self, warehouse_id: int) -> Warehouse | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM warehouses WHERE id = ?", (warehouse_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_warehouse(row) if row else None

    async def list_warehouses(
        self,
        department: str | None = None,
        search: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Warehouse]:
        """List warehouses, newest first, optionally filtered."""
        query = "SELECT * FROM warehouses WHERE 1=1"
        params: list = []

        if department:
            query += " AND department = ?"
            params.append(department)
        if search:
            # SQLite LIKE is case-insensitive for ASCII only
            query += " AND (name LIKE ? OR address LIKE ?)"
            params.extend([f"%{search}%", f"%{search}%"])

        query += " ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_warehouse(row) for row in rows]

    async def count_parts(self, warehouse_id: int) -> int:
        """Number of parts that reference the warehouse."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM parts WHERE warehouse_id = ?", (warehouse_id,)
            )
            row = await cursor.fetchone()
            return row[0]

    async def delete(self, warehouse_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM warehouses WHERE id = ?", (warehouse_id,)
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("warehouse_deleted", warehouse_id=warehouse_id)
        return deleted

    @staticmethod
    def _row_to_warehouse(row: aiosqlite.Row) -> Warehouse:
        return Warehouse(
            id=row["id"],
            name=row["name"],
            address=row["address"],
            department=row["department"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
