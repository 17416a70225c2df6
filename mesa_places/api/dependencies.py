# mesa_places/api/dependencies.py
"""
Dependency Injection для сервисов API.
"""

from __future__ import annotations

from mesa_places.config import settings
from mesa_places.core.auth.tokens import TokenService
from mesa_places.core.places.service import PlaceService
from mesa_places.core.reviews.repository import AvaliationRepository
from mesa_places.core.reviews.service import ReviewService
from mesa_places.core.users.repository import FavoriteRepository, UserRepository
from mesa_places.core.users.service import UserService
from mesa_places.infra.database import DatabaseManager, get_db
from mesa_places.infra.event_bus import EventBus, get_event_bus
from mesa_places.infra.facebook import FacebookClient
from mesa_places.infra.google_places import GooglePlacesClient
from mesa_places.infra.mailer import Mailer

# Синглтоны
_token_service: TokenService | None = None


def get_database() -> DatabaseManager:
    return get_db()


def get_events() -> EventBus:
    return get_event_bus()


def get_token_service() -> TokenService:
    """Получить сервис токенов."""
    global _token_service
    if _token_service is None:
        auth = settings.authentication
        _token_service = TokenService(
            secret=auth.JWT_SECRET,
            algorithm=auth.JWT_ALGORITHM,
            expiration=auth.JWT_EXPIRATION,
        )
    return _token_service


def get_mailer() -> Mailer:
    mail = settings.mail
    return Mailer(
        host=mail.MAIL_HOST,
        port=mail.MAIL_PORT,
        user=mail.MAIL_USER,
        password=mail.MAIL_PASSWORD,
        sender_name=mail.MAIL_SENDER_NAME,
    )


def get_user_service() -> UserService:
    db = get_database()
    return UserService(
        users=UserRepository(db),
        favorites=FavoriteRepository(db),
        tokens=get_token_service(),
        mailer=get_mailer(),
        facebook=FacebookClient(settings.facebook.FACEBOOK_GRAPH_URL),
        client_url=settings.mail.CLIENT_URL,
        logo_url=settings.mail.LOGO_URL,
        password_reset_expiration=settings.authentication.PASSWORD_RESET_EXPIRATION,
    )


def get_review_service() -> ReviewService:
    return ReviewService(AvaliationRepository(get_database()), get_events())


def get_place_service() -> PlaceService:
    client = GooglePlacesClient(
        api_key=settings.google_maps.GOOGLE_MAPS_API_KEY,
        language=settings.google_maps.PLACES_LANGUAGE,
    )
    return PlaceService(client)
