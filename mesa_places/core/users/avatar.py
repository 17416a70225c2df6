# mesa_places/core/users/avatar.py
"""
URL аватара Gravatar по email.
"""

from __future__ import annotations

import hashlib
from urllib.parse import urlencode

GRAVATAR_URL = "https://s.gravatar.com/avatar"


def gravatar_url(email: str, size: int = 200, rating: str = "x", default: str = "retro") -> str:
    """
    Возвращает https-ссылку на аватар.

    Args:
        email: Email пользователя (нормализуется: trim + lower)
        size: Размер в пикселях
        rating: Максимальный рейтинг изображения
        default: Изображение по умолчанию
    """
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": str(size), "r": rating, "d": default})
    return f"{GRAVATAR_URL}/{digest}?{query}"
