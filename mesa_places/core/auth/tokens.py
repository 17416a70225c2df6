# mesa_places/core/auth/tokens.py
"""
Сервис JWT-токенов.

Токен содержит id пользователя и срок действия. Состояния на сервере нет:
валидность определяется только подписью и `exp`.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from mesa_places.common.errors import TokenError


class TokenService:
    """Выпуск и проверка подписанных токенов."""

    def __init__(self, secret: str, algorithm: str = "HS256", expiration: int = 604800) -> None:
        """
        Args:
            secret: Секрет подписи
            algorithm: Алгоритм подписи
            expiration: Время жизни токена по умолчанию (секунды)
        """
        if not secret:
            raise ValueError("JWT secret не задан")
        self._secret = secret
        self._algorithm = algorithm
        self.expiration = expiration

    def sign(self, user_id: int, expiration: int | None = None) -> str:
        """
        Выпускает токен для пользователя.

        Args:
            user_id: ID пользователя
            expiration: Время жизни в секундах (по умолчанию — из настроек)
        """
        lifetime = expiration or self.expiration
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=lifetime)
        return jwt.encode({"id": user_id, "exp": expires_at}, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> int:
        """
        Проверяет токен и возвращает id пользователя.

        Raises:
            TokenError: Подпись неверна, токен истёк или нет claim `id`
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as error:
            raise TokenError("Токен истёк") from error
        except JWTError as error:
            raise TokenError("Невалидный токен") from error

        user_id = payload.get("id")
        if not isinstance(user_id, int):
            raise TokenError("В токене нет id пользователя")
        return user_id


def extract_bearer_token(auth_header: str | None) -> str | None:
    """Извлекает токен из заголовка `Authorization: Bearer <token>`."""
    if not auth_header:
        return None
    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None
