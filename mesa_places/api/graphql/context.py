# mesa_places/api/graphql/context.py
"""
Контекст GraphQL-запроса.
"""

from __future__ import annotations

from typing import Optional

from starlette.requests import HTTPConnection
from strawberry.fastapi import BaseContext

from mesa_places.api.dependencies import (
    get_events,
    get_place_service,
    get_review_service,
    get_user_service,
)
from mesa_places.core.places.service import PlaceService
from mesa_places.core.reviews.service import ReviewService
from mesa_places.core.users.models import User
from mesa_places.core.users.service import UserService
from mesa_places.infra.event_bus import EventBus


class GraphQLContext(BaseContext):
    """
    Зависимости резолверов и текущий пользователь.

    viewer равен None для анонимного запроса; защищённые операции
    превращают это в DomainError INVALID_SESSION.
    """

    def __init__(
        self,
        users: UserService,
        reviews: ReviewService,
        places: PlaceService,
        event_bus: EventBus,
        viewer: Optional[User] = None,
        auth_error: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.users = users
        self.reviews = reviews
        self.places = places
        self.event_bus = event_bus
        self.viewer = viewer
        self.auth_error = auth_error


async def get_context(connection: HTTPConnection) -> GraphQLContext:
    """Собирает контекст из состояния, оставленного AuthMiddleware."""
    return GraphQLContext(
        users=get_user_service(),
        reviews=get_review_service(),
        places=get_place_service(),
        event_bus=get_events(),
        viewer=getattr(connection.state, "user", None),
        auth_error=getattr(connection.state, "auth_error", None),
    )
