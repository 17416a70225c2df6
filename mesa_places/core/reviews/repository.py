# mesa_places/core/reviews/repository.py
"""
Репозиторий отзывов.
"""

from __future__ import annotations

from decimal import Decimal

from mesa_places.core.reviews.models import Avaliation, Review
from mesa_places.infra.database import DatabaseManager


class AvaliationRepository:
    """Репозиторий отзывов о местах."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def create_if_absent(self, avaliation: Avaliation) -> bool:
        """
        Создаёт отзыв, если пользователь ещё не оценивал место.

        Returns:
            True если отзыв создан, False если он уже существовал
        """
        created = await self._db.fetchval(
            """
            INSERT INTO avaliations (user_email, place_id, rating, comment)
            VALUES ($1, $2, $3, $4)
            ON CONFLICT (user_email, place_id) DO NOTHING
            RETURNING TRUE
            """,
            avaliation.user_email,
            avaliation.place_id,
            Decimal(str(avaliation.rating)),
            avaliation.comment,
        )
        return bool(created)

    async def list_for_place(self, place_id: str) -> list[Review]:
        """Все отзывы о месте с именем и аватаром автора."""
        rows = await self._db.fetch(
            """
            SELECT u.name, u.email, u.profile_img, a.place_id, a.rating, a.comment
            FROM avaliations a
            JOIN users u ON u.email = a.user_email
            WHERE a.place_id = $1
            ORDER BY a.created_at
            """,
            place_id,
        )
        return [Review(**dict(row)) for row in rows]
