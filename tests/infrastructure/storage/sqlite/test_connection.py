"""Unit tests for SQLite connection pool."""

from pathlib import Path

import aiosqlite
import pytest

from almacen.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    get_connection,
    get_pool,
    get_transaction,
)


class TestConnectionPoolInit:
    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)
        assert pool.db_path == temp_db_path
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool.initialized is False

    async def test_initialize_opens_connections(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=3)
        await pool.initialize()
        try:
            assert pool.initialized
            assert len(pool._connections) == 3
        finally:
            await pool.close()
        assert pool.initialized is False


class TestConnectionPoolUsage:
    async def test_pragmas(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.acquire() as conn:
                cursor = await conn.execute("PRAGMA foreign_keys")
                assert (await cursor.fetchone())[0] == 1
                cursor = await conn.execute("PRAGMA journal_mode")
                assert (await cursor.fetchone())[0] == "wal"
        finally:
            await pool.close()

    async def test_transaction_commits(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.transaction() as conn:
                await conn.execute("CREATE TABLE t (v INTEGER)")
                await conn.execute("INSERT INTO t VALUES (1)")
            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM t")
                assert (await cursor.fetchone())[0] == 1
        finally:
            await pool.close()

    async def test_transaction_rolls_back_on_error(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            async with pool.transaction() as conn:
                await conn.execute("CREATE TABLE t (v INTEGER)")

            with pytest.raises(RuntimeError):
                async with pool.transaction() as conn:
                    await conn.execute("INSERT INTO t VALUES (1)")
                    raise RuntimeError("boom")

            async with pool.acquire() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM t")
                assert (await cursor.fetchone())[0] == 0
        finally:
            await pool.close()

    async def test_ping(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        try:
            assert await pool.ping() is True
        finally:
            await pool.close()


class TestGlobalPool:
    async def test_singleton(self, initialized_db):
        assert await get_pool() is await get_pool()

    async def test_module_helpers(self, initialized_db):
        async with get_transaction() as conn:
            await conn.execute(
                "INSERT INTO warehouses (name, address, department, created_at, updated_at) "
                "VALUES ('A', 'B', 'C', '2024-01-01T00:00:00', '2024-01-01T00:00:00')"
            )
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT name FROM warehouses")
            row = await cursor.fetchone()
            assert isinstance(row, aiosqlite.Row)
            assert row["name"] == "A"
