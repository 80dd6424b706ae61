"""Tests for the schema migrator."""

from pathlib import Path

import aiosqlite

from almacen.infrastructure.storage.sqlite.migrations import (
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)
from almacen.infrastructure.storage.sqlite.migrations.migrator import MigrationInfo


class TestDiscovery:
    def test_initial_schema_found(self):
        migrations = discover_migrations()
        assert migrations[0].version == "001"
        assert migrations[0].name == "initial_schema"
        assert len(migrations[0].checksum) == 16

    def test_invalid_filename(self, tmp_path: Path):
        bad = tmp_path / "schema.sql"
        bad.write_text("SELECT 1;")
        try:
            MigrationInfo.from_file(bad)
        except ValueError as e:
            assert "Invalid migration filename" in str(e)
        else:
            raise AssertionError("expected ValueError")


class TestInitializeDatabase:
    async def test_fresh_database(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path, create_backup_before=False)
        assert results and all(r.success for r in results)

        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute("SELECT version FROM schema_migrations")
            assert [row[0] for row in await cursor.fetchall()] == ["001"]

    async def test_rerun_is_noop(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        assert await initialize_database(temp_db_path) == []
        # Backup removed after a clean run
        assert not list(temp_db_path.parent.glob("*.backup_*"))

    async def test_status_and_integrity(self, temp_db_path: Path):
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is False
        assert status["pending_migrations"] == ["001"]

        await initialize_database(temp_db_path, create_backup_before=False)
        status = await get_migration_status(temp_db_path)
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []

        checks = await verify_schema_integrity(temp_db_path)
        assert all(c["status"] == "PASS" for c in checks)
