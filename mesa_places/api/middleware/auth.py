# mesa_places/api/middleware/auth.py
"""
Middleware аутентификации.

Проверка best-effort: запрос никогда не блокируется. При успехе пользователь
кладётся в request.state.user, иначе причина отказа пишется в request.state.auth_error.
"""

from __future__ import annotations

from typing import Callable, Optional

import asyncpg
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from mesa_places.common.errors import TokenError
from mesa_places.common.logger import log_debug, log_warning
from mesa_places.core.auth.tokens import extract_bearer_token
from mesa_places.core.users.service import UserService


class AuthMiddleware(BaseHTTPMiddleware):
    """Необязательная JWT-аутентификация по заголовку Authorization."""

    def __init__(self, app, *, user_service_factory: Optional[Callable[[], UserService]] = None) -> None:
        super().__init__(app)
        if user_service_factory is None:
            from mesa_places.api.dependencies import get_user_service

            user_service_factory = get_user_service
        self.user_service_factory = user_service_factory

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.user = None
        request.state.auth_error = None

        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            request.state.auth_error = "Токен не передан"
            return await call_next(request)

        try:
            request.state.user = await self.user_service_factory().authenticate(token)
        except TokenError as e:
            request.state.auth_error = str(e)
            await log_debug(f"Аутентификация отклонена: {e}", extra={"path": request.url.path})
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, RuntimeError) as e:
            # RuntimeError: пул соединений ещё не инициализирован
            request.state.auth_error = "Не удалось загрузить пользователя"
            await log_warning(f"Ошибка БД при аутентификации: {e!r}")

        return await call_next(request)
