# mesa_places/core/reviews/service.py
"""
Сервис отзывов.

Новый отзыв публикуется в шину событий вместе с полным списком отзывов
места; повторный отзыв того же пользователя ничего не меняет и не публикуется.
"""

from __future__ import annotations

from typing import Optional

from mesa_places.common.constants import MAX_RATING, MIN_RATING, StatusCode, Topics, TypeMsg
from mesa_places.common.errors import DomainError, DomainErrorKind, Result
from mesa_places.common.logger import log_info
from mesa_places.core.reviews.models import Avaliation, Review
from mesa_places.core.reviews.repository import AvaliationRepository
from mesa_places.core.users.models import User
from mesa_places.infra.event_bus import EventBus


def is_valid_rating(rating: float) -> bool:
    """Оценка в диапазоне 0..5 и не точнее одного знака после запятой."""
    return MIN_RATING <= rating <= MAX_RATING and round(rating, 1) == rating


class ReviewService:
    """Сценарии отзывов."""

    def __init__(self, avaliations: AvaliationRepository, event_bus: EventBus) -> None:
        self.avaliations = avaliations
        self.event_bus = event_bus

    async def add_avaliation(
        self,
        viewer: Optional[User],
        place_id: str,
        rating: float,
        comment: Optional[str] = None,
    ) -> Result[StatusCode]:
        """Оставляет отзыв от имени текущего пользователя."""
        if viewer is None:
            return DomainError(DomainErrorKind.INVALID_SESSION)
        if not is_valid_rating(rating):
            return DomainError(DomainErrorKind.INVALID_RATING)

        avaliation = Avaliation(
            user_email=viewer.email,
            place_id=place_id,
            rating=rating,
            comment=comment,
        )
        if not await self.avaliations.create_if_absent(avaliation):
            return DomainError(DomainErrorKind.ALREADY_REVIEWED)

        reviews = await self.avaliations.list_for_place(place_id)
        await self.event_bus.publish(
            Topics.AVALIATION_ADDED,
            {"place_id": place_id, "reviews": reviews},
        )
        await log_info(
            f"Новый отзыв о месте {place_id}",
            type_msg=TypeMsg.INFO,
            extra={"user_id": viewer.id},
        )
        return StatusCode.AVALIATION_CREATED

    async def get_avaliations(self, place_id: str) -> list[Review]:
        """Отзывы о месте."""
        return await self.avaliations.list_for_place(place_id)
