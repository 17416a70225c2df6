# mesa_places/core/users/service.py
"""
Сервис пользователей: регистрация, вход, OAuth через Facebook,
управление профилем и избранным.

Ожидаемые отказы возвращаются как DomainError, непредвиденные ошибки
(БД, сеть, SMTP) распространяются вызывающему коду.
"""

from __future__ import annotations

import re
from typing import Optional

import asyncpg

from mesa_places.common.constants import MIN_PASSWORD_LENGTH, UNUSABLE_PASSWORD, StatusCode, TypeMsg
from mesa_places.common.errors import DomainError, DomainErrorKind, Result, TokenError
from mesa_places.common.logger import log_error, log_info, log_warning
from mesa_places.core.auth.passwords import hash_password, verify_password
from mesa_places.core.auth.tokens import TokenService
from mesa_places.core.users.avatar import gravatar_url
from mesa_places.core.users.models import AuthPayload, Favorite, User, UserCreateDTO
from mesa_places.core.users.repository import FavoriteRepository, UserRepository
from mesa_places.infra.facebook import FacebookClient
from mesa_places.infra.mailer import (
    CHANGE_PASSWORD_SUBJECT,
    Mailer,
    change_password_link,
    render_change_password_html,
)

EMAIL_PATTERN = re.compile(
    r"""(?:[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"""
    r"""|"(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21\x23-\x5b\x5d-\x7f]|\\[\x01-\x09\x0b\x0c\x0e-\x7f])*")"""
    r"""@(?:(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?"""
    r"""|\[(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"""
    r"""(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?|[a-z0-9-]*[a-z0-9]:"""
    r"""(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21-\x5a\x53-\x7f]|\\[\x01-\x09\x0b\x0c\x0e-\x7f])+)\])""",
    re.IGNORECASE,
)


def is_valid_email(email: str) -> bool:
    """Проверяет формат email (RFC 5322, упрощённо)."""
    return EMAIL_PATTERN.fullmatch(email or "") is not None


_INVALID_SESSION = DomainError(DomainErrorKind.INVALID_SESSION)


class UserService:
    """Сценарии пользователей."""

    def __init__(
        self,
        users: UserRepository,
        favorites: FavoriteRepository,
        tokens: TokenService,
        mailer: Mailer,
        facebook: FacebookClient,
        *,
        client_url: str,
        logo_url: str,
        password_reset_expiration: int = 300,
    ) -> None:
        self.users = users
        self.favorites = favorites
        self.tokens = tokens
        self.mailer = mailer
        self.facebook = facebook
        self.client_url = client_url
        self.logo_url = logo_url
        self.password_reset_expiration = password_reset_expiration

    # =========================================================================
    # АУТЕНТИФИКАЦИЯ
    # =========================================================================

    async def authenticate(self, token: str) -> User:
        """
        Проверяет токен и загружает пользователя.

        Raises:
            TokenError: Токен невалиден или пользователь не существует
        """
        user_id = self.tokens.verify(token)
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise TokenError(f"Пользователь {user_id} не найден")
        return user

    async def register_user(self, email: str, password: str, name: Optional[str] = None) -> Result[AuthPayload]:
        """Регистрирует пользователя по email и паролю."""
        if not is_valid_email(email):
            return DomainError(DomainErrorKind.INVALID_EMAIL)
        if len(password) < MIN_PASSWORD_LENGTH:
            return DomainError(DomainErrorKind.PASSWORD_TOO_SHORT)

        dto = UserCreateDTO(
            email=email,
            name=name,
            password=hash_password(password),
            profile_img=gravatar_url(email),
        )
        try:
            user = await self.users.create(dto)
        except asyncpg.UniqueViolationError:
            await log_warning(f"Повторная регистрация email {email}")
            return DomainError(DomainErrorKind.EMAIL_IN_USE)
        except asyncpg.PostgresError as e:
            await log_error(f"Ошибка регистрации {email}: {e}")
            return DomainError(DomainErrorKind.REGISTRATION_FAILED)

        await log_info(f"Регистрация нового пользователя {user.id}", type_msg=TypeMsg.INFO)
        return self._auth_payload(user, favorites=[])

    async def login(self, email: str, password: str) -> Result[AuthPayload]:
        """
        Вход по email и паролю.

        Отсутствующий пользователь и неверный пароль дают одну и ту же ошибку.
        """
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password):
            return DomainError(DomainErrorKind.INVALID_CREDENTIALS)

        favorites = await self.favorites.list_for_user(user.id)
        return self._auth_payload(user, favorites=favorites)

    async def fb_login(self, access_token: str) -> Result[AuthPayload]:
        """Вход через Facebook: находит или создаёт пользователя по email."""
        identity = await self.facebook.fetch_identity(access_token)
        if not identity.is_complete:
            return DomainError(DomainErrorKind.IDENTITY_PROVIDER_FAILED)

        dto = UserCreateDTO(
            email=identity.email,
            name=identity.name,
            password=UNUSABLE_PASSWORD,
            profile_img=gravatar_url(identity.email),
        )
        user, created = await self.users.get_or_create(dto)

        if created:
            await log_info(f"Новый пользователь через Facebook {user.id}", type_msg=TypeMsg.INFO)
            favorites: list[Favorite] = []
        else:
            favorites = await self.favorites.list_for_user(user.id)

        return self._auth_payload(user, favorites=favorites)

    def _auth_payload(self, user: User, favorites: list[Favorite]) -> AuthPayload:
        return AuthPayload(
            email=user.email,
            name=user.name,
            profile_img=user.profile_img,
            token=self.tokens.sign(user.id),
            favorites=favorites,
        )

    # =========================================================================
    # ПРОФИЛЬ
    # =========================================================================

    async def change_name(self, viewer: Optional[User], name: str) -> Result[str]:
        """Меняет отображаемое имя и возвращает новое."""
        if viewer is None:
            return _INVALID_SESSION

        updated = await self.users.update_name(viewer.id, name)
        if updated is None:
            return _INVALID_SESSION
        return updated.name

    async def change_password(
        self,
        viewer: Optional[User],
        password: str,
        new_password: str,
    ) -> Result[StatusCode]:
        """Меняет пароль после проверки текущего."""
        if viewer is None:
            return _INVALID_SESSION
        if not verify_password(password, viewer.password):
            return DomainError(DomainErrorKind.INVALID_PASSWORD)
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return DomainError(DomainErrorKind.PASSWORD_TOO_SHORT)

        await self.users.update_password(viewer.id, hash_password(new_password))
        await log_info(f"Пользователь {viewer.id} сменил пароль", type_msg=TypeMsg.INFO)
        return StatusCode.PASSWORD_CHANGED

    async def request_password_change(self, viewer: Optional[User]) -> Result[StatusCode]:
        """
        Отправляет письмо со ссылкой смены пароля.

        Ссылка несёт короткоживущий токен; других следов запроса не остаётся.
        """
        if viewer is None:
            return _INVALID_SESSION

        token = self.tokens.sign(viewer.id, expiration=self.password_reset_expiration)
        html = render_change_password_html(
            link=change_password_link(self.client_url, token),
            logo_url=self.logo_url,
            sender_name=self.mailer.sender_name,
        )
        await self.mailer.send_html(viewer.email, CHANGE_PASSWORD_SUBJECT, html)
        return StatusCode.PASSWORD_RESET_SENT

    # =========================================================================
    # ИЗБРАННОЕ
    # =========================================================================

    async def set_favorite(
        self,
        viewer: Optional[User],
        place_id: str,
        place_name: Optional[str] = None,
        place_icon: Optional[str] = None,
    ) -> Result[StatusCode]:
        """Переключает место в избранном: добавляет, если нет, иначе удаляет."""
        if viewer is None:
            return _INVALID_SESSION

        favorite = Favorite(
            user_id=viewer.id,
            place_id=place_id,
            place_name=place_name,
            place_icon=place_icon,
        )
        if await self.favorites.create_if_absent(favorite):
            return StatusCode.FAVORITE_ADDED

        await self.favorites.delete(viewer.id, place_id)
        return StatusCode.FAVORITE_REMOVED
