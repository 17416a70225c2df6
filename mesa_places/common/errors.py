# mesa_places/common/errors.py
"""
Доменные ошибки.

Ожидаемые отказы (неверный пароль, повторная регистрация, отсутствие сессии)
не выбрасываются, а возвращаются как значения DomainError внутри успешного
ответа. Клиент различает результат по форме полезной нагрузки.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeVar, Union


class DomainErrorKind(str, Enum):
    """Виды доменных ошибок."""
    INVALID_EMAIL = "INVALID_EMAIL"
    PASSWORD_TOO_SHORT = "PASSWORD_TOO_SHORT"
    EMAIL_IN_USE = "EMAIL_IN_USE"
    REGISTRATION_FAILED = "REGISTRATION_FAILED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    ALREADY_REVIEWED = "ALREADY_REVIEWED"
    INVALID_SESSION = "INVALID_SESSION"
    IDENTITY_PROVIDER_FAILED = "IDENTITY_PROVIDER_FAILED"
    INVALID_RATING = "INVALID_RATING"


ERROR_MESSAGES: dict[DomainErrorKind, str] = {
    DomainErrorKind.INVALID_EMAIL: "Email inválido",
    DomainErrorKind.PASSWORD_TOO_SHORT: "Senha muito curta (Min. 8 caracteres)",
    DomainErrorKind.EMAIL_IN_USE: "Este email já está em uso",
    DomainErrorKind.REGISTRATION_FAILED: "Não foi possível efetuar o cadastro",
    DomainErrorKind.INVALID_CREDENTIALS: "Email ou senha incorretos",
    DomainErrorKind.INVALID_PASSWORD: "Senha atual incorreta",
    DomainErrorKind.ALREADY_REVIEWED: "Você já avaliou este lugar",
    DomainErrorKind.INVALID_SESSION: "Sessão inválida",
    DomainErrorKind.IDENTITY_PROVIDER_FAILED: "Não foi possível realizar a autenticação",
    DomainErrorKind.INVALID_RATING: "Avaliação deve ser um valor de 0 a 5",
}


@dataclass(frozen=True)
class DomainError:
    """Доменная ошибка, возвращаемая как значение."""
    kind: DomainErrorKind

    @property
    def message(self) -> str:
        """Текст ошибки для клиента."""
        return ERROR_MESSAGES[self.kind]


T = TypeVar("T")

# Результат операции: полезная нагрузка или доменная ошибка
Result = Union[T, DomainError]


# =============================================================================
# ИСКЛЮЧЕНИЯ ИНФРАСТРУКТУРЫ (распространяются как транспортные ошибки)
# =============================================================================

class TokenError(Exception):
    """Токен не прошёл проверку подписи или истёк."""
    pass


class PlacesLookupError(Exception):
    """Ошибка запроса к Google Places API."""
    pass


class IdentityLookupError(Exception):
    """Ошибка запроса к Facebook Graph API."""
    pass


class MailDeliveryError(Exception):
    """Ошибка отправки письма через почтовый релей."""
    pass
