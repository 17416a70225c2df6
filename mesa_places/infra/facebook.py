# mesa_places/infra/facebook.py
"""
Клиент Facebook Graph API: обмен access token на email и имя пользователя.
"""

from __future__ import annotations

from typing import Awaitable, Callable

import aiohttp
from pydantic import BaseModel

from mesa_places.common.errors import IdentityLookupError
from mesa_places.common.logger import log_warning
from mesa_places.infra.http_session import get_http_session


class FacebookIdentity(BaseModel):
    """Профиль, возвращённый Graph API (поля могут отсутствовать)."""
    email: str | None = None
    name: str | None = None

    @property
    def is_complete(self) -> bool:
        """Есть ли email и имя."""
        return bool(self.email and self.name)


class FacebookClient:
    """Серверные запросы к Graph API."""

    def __init__(
        self,
        graph_url: str = "https://graph.facebook.com",
        session_getter: Callable[[], Awaitable[aiohttp.ClientSession]] = get_http_session,
    ) -> None:
        self._graph_url = graph_url.rstrip("/")
        self._session_getter = session_getter

    async def fetch_identity(self, access_token: str) -> FacebookIdentity:
        """
        Запрашивает /me?fields=email,name.

        Ответ Graph API с полем `error` (невалидный токен) возвращается как
        пустой профиль: решение об отказе принимает вызывающий код.

        Raises:
            IdentityLookupError: Сетевая ошибка
        """
        params = {"fields": "email,name", "access_token": access_token}
        try:
            session = await self._session_getter()
            async with session.get(f"{self._graph_url}/me", params=params) as response:
                payload = await response.json(content_type=None)
        except aiohttp.ClientError as error:
            await log_warning(f"Запрос к Graph API завершился ошибкой: {error}")
            raise IdentityLookupError(str(error)) from error

        if not isinstance(payload, dict) or "error" in payload:
            await log_warning("Graph API отклонил токен", extra={"response": payload})
            return FacebookIdentity()

        return FacebookIdentity(email=payload.get("email"), name=payload.get("name"))
