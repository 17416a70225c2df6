# tests/core/test_reviews.py
"""
Тесты отзывов: репозиторий и сервис с публикацией в шину событий.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from mesa_places.common.constants import StatusCode, Topics
from mesa_places.common.errors import DomainError, DomainErrorKind
from mesa_places.core.reviews.models import Avaliation, Review
from mesa_places.core.reviews.repository import AvaliationRepository
from mesa_places.core.reviews.service import ReviewService, is_valid_rating
from mesa_places.core.users.models import User
from mesa_places.infra.event_bus import EventBus


def review_row(email: str = "ana@example.com", rating=Decimal("4.5")) -> dict:
    return {
        "name": "Ana",
        "email": email,
        "profile_img": "img",
        "place_id": "p1",
        "rating": rating,
        "comment": "Ótimo",
    }


class TestAvaliationRepository:

    @pytest.mark.asyncio
    async def test_create_if_absent(self, mock_db: MagicMock) -> None:
        repo = AvaliationRepository(mock_db)
        avaliation = Avaliation(user_email="ana@example.com", place_id="p1", rating=4.5, comment="Ótimo")

        mock_db.fetchval.return_value = True
        assert await repo.create_if_absent(avaliation) is True

        mock_db.fetchval.return_value = None
        assert await repo.create_if_absent(avaliation) is False

        query, *args = mock_db.fetchval.call_args.args
        assert "ON CONFLICT (user_email, place_id) DO NOTHING" in query
        assert args == ["ana@example.com", "p1", Decimal("4.5"), "Ótimo"]

    @pytest.mark.asyncio
    async def test_list_for_place_converts_rating(self, mock_db: MagicMock) -> None:
        mock_db.fetch.return_value = [review_row()]

        reviews = await AvaliationRepository(mock_db).list_for_place("p1")

        assert len(reviews) == 1
        assert reviews[0].rating == 4.5
        assert isinstance(reviews[0].rating, float)
        assert "JOIN users" in mock_db.fetch.call_args.args[0]


@pytest.fixture
def avaliations_repo() -> MagicMock:
    repo = MagicMock(spec=AvaliationRepository)
    repo.list_for_place.return_value = [Review(**review_row())]
    return repo


class TestReviewService:

    @pytest.mark.asyncio
    async def test_requires_viewer(self, avaliations_repo: MagicMock, fresh_event_bus: EventBus) -> None:
        service = ReviewService(avaliations_repo, fresh_event_bus)

        result = await service.add_avaliation(None, "p1", 5, "x")

        assert result == DomainError(DomainErrorKind.INVALID_SESSION)
        avaliations_repo.create_if_absent.assert_not_called()

    @pytest.mark.asyncio
    async def test_new_review_published_to_subscribers(
        self,
        avaliations_repo: MagicMock,
        fresh_event_bus: EventBus,
        sample_user: User,
    ) -> None:
        avaliations_repo.create_if_absent.return_value = True
        service = ReviewService(avaliations_repo, fresh_event_bus)
        stream = fresh_event_bus.subscribe(Topics.AVALIATION_ADDED)

        result = await service.add_avaliation(sample_user, "p1", 4.5, "Ótimo")

        assert result == StatusCode.AVALIATION_CREATED
        event = await asyncio.wait_for(stream.__anext__(), timeout=1)
        assert event.payload["place_id"] == "p1"
        assert event.payload["reviews"] == [Review(**review_row())]
        await stream.aclose()

        created = avaliations_repo.create_if_absent.call_args.args[0]
        assert created.user_email == sample_user.email

    @pytest.mark.asyncio
    async def test_second_review_not_published(
        self,
        avaliations_repo: MagicMock,
        fresh_event_bus: EventBus,
        sample_user: User,
    ) -> None:
        avaliations_repo.create_if_absent.return_value = False
        service = ReviewService(avaliations_repo, fresh_event_bus)
        stream = fresh_event_bus.subscribe(Topics.AVALIATION_ADDED)

        result = await service.add_avaliation(sample_user, "p1", 1, "Ruim")

        assert result == DomainError(DomainErrorKind.ALREADY_REVIEWED)
        avaliations_repo.list_for_place.assert_not_called()
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(stream.__anext__(), timeout=0.05)

    @pytest.mark.asyncio
    async def test_get_avaliations(self, avaliations_repo: MagicMock, fresh_event_bus: EventBus) -> None:
        reviews = await ReviewService(avaliations_repo, fresh_event_bus).get_avaliations("p1")

        assert [r.email for r in reviews] == ["ana@example.com"]
        avaliations_repo.list_for_place.assert_awaited_once_with("p1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating", [-1, 5.5, 10, 4.55, float("nan")])
    async def test_invalid_rating_rejected(
        self,
        avaliations_repo: MagicMock,
        fresh_event_bus: EventBus,
        sample_user: User,
        rating: float,
    ) -> None:
        service = ReviewService(avaliations_repo, fresh_event_bus)
        stream = fresh_event_bus.subscribe(Topics.AVALIATION_ADDED)

        result = await service.add_avaliation(sample_user, "p1", rating, "x")

        assert result == DomainError(DomainErrorKind.INVALID_RATING)
        assert result.message == "Avaliação deve ser um valor de 0 a 5"
        avaliations_repo.create_if_absent.assert_not_called()
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(stream.__anext__(), timeout=0.05)


class TestIsValidRating:

    @pytest.mark.parametrize("rating", [0, 0.5, 3, 4.3, 5])
    def test_accepts(self, rating: float) -> None:
        assert is_valid_rating(rating)

    @pytest.mark.parametrize("rating", [-0.1, 5.1, 4.55, 10])
    def test_rejects(self, rating: float) -> None:
        assert not is_valid_rating(rating)
