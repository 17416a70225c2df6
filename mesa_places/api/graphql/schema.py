# mesa_places/api/graphql/schema.py
"""
GraphQL-схема: запросы, мутации и подписки.

Резолверы только переводят аргументы в вызовы сервисов и результаты
сервисов в GraphQL-типы.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

import strawberry
from strawberry.types import Info

from mesa_places.api.graphql.context import GraphQLContext
from mesa_places.api.graphql.types import (
    AuthPayload,
    AuthResult,
    DomainError,
    NameChanged,
    NameResult,
    Place,
    Review,
    StatusMessage,
    StatusResult,
)
from mesa_places.common import errors
from mesa_places.common.constants import Topics

GraphQLInfo = Info[GraphQLContext, None]


def _auth_result(result) -> AuthResult:
    if isinstance(result, errors.DomainError):
        return DomainError.from_error(result)
    return AuthPayload.from_model(result)


def _status_result(result) -> StatusResult:
    if isinstance(result, errors.DomainError):
        return DomainError.from_error(result)
    return StatusMessage.from_code(result)


# =============================================================================
# QUERY
# =============================================================================

@strawberry.type
class Query:
    @strawberry.field(description="Поиск мест рядом с точкой (радиус в км)")
    async def get_place(
        self,
        info: GraphQLInfo,
        place: str,
        lat: float,
        lng: float,
        radius: float,
    ) -> list[Place]:
        places = await info.context.places.search(place, lat, lng, radius)
        return [Place.from_model(p) for p in places]

    @strawberry.field
    async def login(self, info: GraphQLInfo, email: str, password: str) -> AuthResult:
        return _auth_result(await info.context.users.login(email, password))

    @strawberry.field
    async def fb_login(self, info: GraphQLInfo, access_token: str) -> AuthResult:
        return _auth_result(await info.context.users.fb_login(access_token))

    @strawberry.field
    async def get_avaliations(self, info: GraphQLInfo, place_id: str) -> list[Review]:
        reviews = await info.context.reviews.get_avaliations(place_id)
        return [Review.from_model(r) for r in reviews]


# =============================================================================
# MUTATION
# =============================================================================

@strawberry.type
class Mutation:
    @strawberry.mutation
    async def register_user(
        self,
        info: GraphQLInfo,
        email: str,
        password: str,
        name: Optional[str] = None,
    ) -> AuthResult:
        return _auth_result(await info.context.users.register_user(email, password, name))

    @strawberry.mutation
    async def add_avaliation(
        self,
        info: GraphQLInfo,
        place_id: str,
        rating: float,
        comment: Optional[str] = None,
    ) -> StatusResult:
        ctx = info.context
        return _status_result(await ctx.reviews.add_avaliation(ctx.viewer, place_id, rating, comment))

    @strawberry.mutation
    async def change_password_request(self, info: GraphQLInfo) -> StatusResult:
        ctx = info.context
        return _status_result(await ctx.users.request_password_change(ctx.viewer))

    @strawberry.mutation
    async def change_name(self, info: GraphQLInfo, name: str) -> NameResult:
        ctx = info.context
        result = await ctx.users.change_name(ctx.viewer, name)
        if isinstance(result, errors.DomainError):
            return DomainError.from_error(result)
        return NameChanged(name=result)

    @strawberry.mutation
    async def set_favorite(
        self,
        info: GraphQLInfo,
        place_id: str,
        place_name: Optional[str] = None,
        place_icon: Optional[str] = None,
    ) -> StatusResult:
        ctx = info.context
        return _status_result(await ctx.users.set_favorite(ctx.viewer, place_id, place_name, place_icon))

    @strawberry.mutation
    async def change_password(self, info: GraphQLInfo, password: str, new_password: str) -> StatusResult:
        ctx = info.context
        return _status_result(await ctx.users.change_password(ctx.viewer, password, new_password))


# =============================================================================
# SUBSCRIPTION
# =============================================================================

@strawberry.type
class Subscription:
    @strawberry.subscription(description="Полный список отзывов места после каждого нового отзыва")
    async def avaliation_added(
        self,
        info: GraphQLInfo,
        place_id: Optional[str] = None,
    ) -> AsyncGenerator[list[Review], None]:
        async with info.context.event_bus.subscribe(Topics.AVALIATION_ADDED) as stream:
            async for event in stream:
                if place_id is not None and event.payload["place_id"] != place_id:
                    continue
                yield [Review.from_model(r) for r in event.payload["reviews"]]


schema = strawberry.Schema(query=Query, mutation=Mutation, subscription=Subscription)
