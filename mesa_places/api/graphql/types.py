# mesa_places/api/graphql/types.py
"""
GraphQL-типы.

Результаты мутаций и входа объявлены как union полезной нагрузки и DomainError;
клиент различает их по __typename.
"""

from __future__ import annotations

from typing import Annotated, Optional, Union

import strawberry

from mesa_places.common import errors
from mesa_places.common.constants import STATUS_MESSAGES
from mesa_places.common.constants import StatusCode as StatusCodeEnum
from mesa_places.core.places.models import ExternalPlace
from mesa_places.core.reviews.models import Review as ReviewModel
from mesa_places.core.users.models import AuthPayload as AuthPayloadModel
from mesa_places.core.users.models import Favorite as FavoriteModel

DomainErrorKind = strawberry.enum(errors.DomainErrorKind, name="DomainErrorKind")
StatusCode = strawberry.enum(StatusCodeEnum, name="StatusCode")


# =============================================================================
# ТИПЫ
# =============================================================================

@strawberry.type
class Favorite:
    place_id: str
    place_name: Optional[str] = None
    place_icon: Optional[str] = None

    @classmethod
    def from_model(cls, favorite: FavoriteModel) -> Favorite:
        return cls(
            place_id=favorite.place_id,
            place_name=favorite.place_name,
            place_icon=favorite.place_icon,
        )


@strawberry.type
class AuthPayload:
    """Профиль пользователя и токен сессии."""
    email: str
    name: Optional[str]
    profile_img: Optional[str]
    token: str
    favorites: list[Favorite]

    @classmethod
    def from_model(cls, payload: AuthPayloadModel) -> AuthPayload:
        return cls(
            email=payload.email,
            name=payload.name,
            profile_img=payload.profile_img,
            token=payload.token,
            favorites=[Favorite.from_model(f) for f in payload.favorites],
        )


@strawberry.type
class Place:
    """Место из Google Places."""
    id: Optional[str] = None
    icon: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    rating: Optional[float] = None
    website: Optional[str] = None
    is_open: Optional[bool] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @classmethod
    def from_model(cls, place: ExternalPlace) -> Place:
        return cls(**place.model_dump())


@strawberry.type
class Review:
    """Отзыв с данными автора."""
    name: Optional[str]
    email: str
    profile_img: Optional[str]
    place_id: str
    rating: float
    comment: Optional[str]

    @classmethod
    def from_model(cls, review: ReviewModel) -> Review:
        return cls(**review.model_dump())


@strawberry.type
class StatusMessage:
    """Успешный результат мутации без сущности."""
    code: StatusCode
    message: str

    @classmethod
    def from_code(cls, code: StatusCodeEnum) -> StatusMessage:
        return cls(code=code, message=STATUS_MESSAGES[code])


@strawberry.type
class NameChanged:
    name: Optional[str]


@strawberry.type
class DomainError:
    """Ожидаемый отказ операции."""
    kind: DomainErrorKind
    message: str

    @classmethod
    def from_error(cls, error: errors.DomainError) -> DomainError:
        return cls(kind=error.kind, message=error.message)


# =============================================================================
# UNION-РЕЗУЛЬТАТЫ
# =============================================================================

AuthResult = Annotated[Union[AuthPayload, DomainError], strawberry.union("AuthResult")]
StatusResult = Annotated[Union[StatusMessage, DomainError], strawberry.union("StatusResult")]
NameResult = Annotated[Union[NameChanged, DomainError], strawberry.union("NameResult")]
