# mesa_places/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class Topics:
    """Топики шины событий."""
    AVALIATION_ADDED = "avaliationAdded"


class StatusCode(str, Enum):
    """Коды успешных операций, возвращаемых клиенту."""
    AVALIATION_CREATED = "AVALIATION_CREATED"
    FAVORITE_ADDED = "FAVORITE_ADDED"
    FAVORITE_REMOVED = "FAVORITE_REMOVED"
    PASSWORD_RESET_SENT = "PASSWORD_RESET_SENT"
    PASSWORD_CHANGED = "PASSWORD_CHANGED"


STATUS_MESSAGES: dict[StatusCode, str] = {
    StatusCode.AVALIATION_CREATED: "Avaliação criada",
    StatusCode.FAVORITE_ADDED: "Favorito adicionado",
    StatusCode.FAVORITE_REMOVED: "Favorito removido",
    StatusCode.PASSWORD_RESET_SENT: "Acesse seu email para continuar",
    StatusCode.PASSWORD_CHANGED: "Senha alterada com sucesso!",
}

# Минимальная длина пароля
MIN_PASSWORD_LENGTH = 8

# Маркер пароля для аккаунтов, созданных через OAuth (не является bcrypt-хэшем)
UNUSABLE_PASSWORD = "!"

# Допустимый диапазон оценки отзыва (один знак после запятой)
MIN_RATING = 0
MAX_RATING = 5
