# mesa_places/core/users/repository.py
"""
Репозитории пользователей и избранного.
Реализуют паттерн Repository для абстракции доступа к данным.

Уникальность (email, пара пользователь/место) обеспечивает БД: вставки идут
через ON CONFLICT DO NOTHING, и отсутствие возвращённой строки означает, что
запись уже существовала.
"""

from __future__ import annotations

from typing import Optional

from mesa_places.common.constants import TypeMsg
from mesa_places.common.logger import log_info
from mesa_places.core.users.models import Favorite, User, UserCreateDTO
from mesa_places.infra.database import DatabaseManager

_USER_COLUMNS = "id, email, name, password, profile_img, created_at, updated_at"


class UserRepository:
    """Репозиторий пользователей."""

    def __init__(self, db: DatabaseManager) -> None:
        """
        Инициализация репозитория.

        Args:
            db: Менеджер базы данных (Dependency Injection)
        """
        self._db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Получает пользователя по ID."""
        row = await self._db.fetchrow(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1",
            user_id,
        )
        return User(**dict(row)) if row else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Получает пользователя по email."""
        row = await self._db.fetchrow(
            f"SELECT {_USER_COLUMNS} FROM users WHERE email = $1",
            email,
        )
        return User(**dict(row)) if row else None

    async def create(self, dto: UserCreateDTO) -> User:
        """
        Создаёт пользователя.

        Raises:
            asyncpg.UniqueViolationError: Email уже занят
        """
        row = await self._db.fetchrow(
            f"""
            INSERT INTO users (email, name, password, profile_img)
            VALUES ($1, $2, $3, $4)
            RETURNING {_USER_COLUMNS}
            """,
            dto.email,
            dto.name,
            dto.password,
            dto.profile_img,
        )
        await log_info(f"Пользователь {dto.email} создан", type_msg=TypeMsg.DEBUG)
        return User(**dict(row))

    async def get_or_create(self, dto: UserCreateDTO) -> tuple[User, bool]:
        """
        Находит пользователя по email или создаёт нового.

        Returns:
            (пользователь, создан ли он сейчас)
        """
        row = await self._db.fetchrow(
            f"""
            INSERT INTO users (email, name, password, profile_img)
            VALUES ($1, $2, $3, $4)
            ON CONFLICT (email) DO NOTHING
            RETURNING {_USER_COLUMNS}
            """,
            dto.email,
            dto.name,
            dto.password,
            dto.profile_img,
        )
        if row is not None:
            return User(**dict(row)), True

        existing = await self.get_by_email(dto.email)
        if existing is None:
            raise LookupError(f"Пользователь {dto.email} не найден после конфликта вставки")
        return existing, False

    async def update_name(self, user_id: int, name: str) -> Optional[User]:
        """Обновляет отображаемое имя."""
        row = await self._db.fetchrow(
            f"""
            UPDATE users
            SET name = $2, updated_at = NOW()
            WHERE id = $1
            RETURNING {_USER_COLUMNS}
            """,
            user_id,
            name,
        )
        return User(**dict(row)) if row else None

    async def update_password(self, user_id: int, hashed_password: str) -> bool:
        """Сохраняет новый хэш пароля."""
        status = await self._db.execute(
            """
            UPDATE users
            SET password = $2, updated_at = NOW()
            WHERE id = $1
            """,
            user_id,
            hashed_password,
        )
        return status == "UPDATE 1"


class FavoriteRepository:
    """Репозиторий избранных мест."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def list_for_user(self, user_id: int) -> list[Favorite]:
        """Избранное пользователя в порядке добавления."""
        rows = await self._db.fetch(
            """
            SELECT user_id, place_id, place_name, place_icon
            FROM favorites
            WHERE user_id = $1
            ORDER BY created_at
            """,
            user_id,
        )
        return [Favorite(**dict(row)) for row in rows]

    async def create_if_absent(self, favorite: Favorite) -> bool:
        """
        Добавляет место в избранное, если пары (пользователь, место) ещё нет.

        Returns:
            True если запись создана
        """
        created = await self._db.fetchval(
            """
            INSERT INTO favorites (user_id, place_id, place_name, place_icon)
            VALUES ($1, $2, $3, $4)
            ON CONFLICT (user_id, place_id) DO NOTHING
            RETURNING TRUE
            """,
            favorite.user_id,
            favorite.place_id,
            favorite.place_name,
            favorite.place_icon,
        )
        return bool(created)

    async def delete(self, user_id: int, place_id: str) -> bool:
        """Удаляет место из избранного."""
        status = await self._db.execute(
            "DELETE FROM favorites WHERE user_id = $1 AND place_id = $2",
            user_id,
            place_id,
        )
        return status == "DELETE 1"
