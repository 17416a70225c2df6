# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("JWT_SECRET", "test_jwt_secret")
os.environ.setdefault("DB_PASSWORD", "test_password")
os.environ.setdefault("GOOGLE_MAPS_API_KEY", "test_api_key")

from mesa_places.core.auth.passwords import hash_password  # noqa: E402
from mesa_places.core.auth.tokens import TokenService  # noqa: E402
from mesa_places.core.users.models import User  # noqa: E402
from mesa_places.infra import event_bus  # noqa: E402
from mesa_places.infra.event_bus import EventBus  # noqa: E402


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Путь к файлу конфигурации."""
    return project_root / "config" / "config.json"


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ
# =============================================================================

@pytest.fixture
def mock_db() -> MagicMock:
    """Мок DatabaseManager."""
    db = MagicMock()
    db.fetchrow = AsyncMock()
    db.fetch = AsyncMock(return_value=[])
    db.fetchval = AsyncMock()
    db.execute = AsyncMock()
    db.health_check = AsyncMock(return_value=True)
    return db


@pytest.fixture
def fresh_event_bus() -> Generator[EventBus, None, None]:
    """Чистая шина событий (сброс синглтона)."""
    EventBus._instance = None
    event_bus._event_bus = None
    bus = event_bus.get_event_bus()
    yield bus
    EventBus._instance = None
    event_bus._event_bus = None


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret="test_jwt_secret", expiration=3600)


# =============================================================================
# ДАННЫЕ
# =============================================================================

@pytest.fixture(scope="session")
def known_password() -> str:
    return "correct-horse"


@pytest.fixture(scope="session")
def known_password_hash(known_password: str) -> str:
    return hash_password(known_password)


@pytest.fixture
def sample_user_row(known_password_hash: str) -> dict[str, Any]:
    """Строка пользователя из БД."""
    return {
        "id": 1,
        "email": "ana@example.com",
        "name": "Ana",
        "password": known_password_hash,
        "profile_img": "https://s.gravatar.com/avatar/abc?s=200&r=x&d=retro",
        "created_at": datetime(2024, 1, 1, 12, 0),
        "updated_at": datetime(2024, 1, 1, 12, 0),
    }


@pytest.fixture
def sample_user(sample_user_row: dict[str, Any]) -> User:
    return User(**sample_user_row)
