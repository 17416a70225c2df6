# tests/infra/test_database.py
"""
Тесты менеджера БД и синхронизации схемы.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from mesa_places.infra.database import DatabaseManager, get_db, sync_schema


def make_transactional_db() -> tuple[MagicMock, MagicMock]:
    conn = MagicMock()
    conn.execute = AsyncMock()

    tx = MagicMock()
    tx.__aenter__ = AsyncMock(return_value=conn)
    tx.__aexit__ = AsyncMock(return_value=False)

    db = MagicMock()
    db.transaction = MagicMock(return_value=tx)
    return db, conn


class TestDatabaseManager:

    def test_singleton(self) -> None:
        assert DatabaseManager() is DatabaseManager()
        assert get_db() is DatabaseManager()

    def test_pool_required(self) -> None:
        manager = DatabaseManager()
        with patch.object(manager, "_pool", None):
            with pytest.raises(RuntimeError):
                _ = manager.pool

    @pytest.mark.asyncio
    async def test_health_check_false_without_pool(self) -> None:
        manager = DatabaseManager()
        with patch.object(manager, "_pool", None):
            assert await manager.health_check() is False

    @pytest.mark.asyncio
    async def test_health_check_true(self) -> None:
        manager = DatabaseManager()
        with patch.object(manager, "fetchval", AsyncMock(return_value=1)):
            assert await manager.health_check() is True


class TestSyncSchema:

    @pytest.mark.asyncio
    async def test_applies_schema(self) -> None:
        db, conn = make_transactional_db()

        await sync_schema(db)

        executed = [c.args[0] for c in conn.execute.call_args_list]
        assert len(executed) == 1
        assert "CREATE TABLE IF NOT EXISTS users" in executed[0]
        assert "UNIQUE (user_email, place_id)" in executed[0]

    @pytest.mark.asyncio
    async def test_force_drops_tables_first(self) -> None:
        db, conn = make_transactional_db()

        await sync_schema(db, force=True)

        executed = [c.args[0] for c in conn.execute.call_args_list]
        assert executed[:3] == [
            "DROP TABLE IF EXISTS avaliations CASCADE",
            "DROP TABLE IF EXISTS favorites CASCADE",
            "DROP TABLE IF EXISTS users CASCADE",
        ]
        assert "CREATE TABLE IF NOT EXISTS avaliations" in executed[3]

    @pytest.mark.asyncio
    async def test_missing_schema_file(self, tmp_path: Path) -> None:
        db, _ = make_transactional_db()
        with patch("mesa_places.config.loader.get_project_root", return_value=tmp_path):
            with pytest.raises(FileNotFoundError):
                await sync_schema(db)
