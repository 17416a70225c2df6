# mesa_places/core/auth/passwords.py
"""
Хэширование паролей (bcrypt через passlib).
"""

from __future__ import annotations

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Возвращает bcrypt-хэш пароля."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """
    Сравнивает пароль с хэшем.

    Значения, не являющиеся bcrypt-хэшем (маркер OAuth-аккаунтов), никогда
    не совпадают.
    """
    if not hashed_password or pwd_context.identify(hashed_password) is None:
        return False
    return pwd_context.verify(plain_password, hashed_password)
