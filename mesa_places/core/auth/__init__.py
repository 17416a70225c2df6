# mesa_places/core/auth/__init__.py
"""
Токены доступа и хэширование паролей.
"""

from mesa_places.core.auth.passwords import hash_password, verify_password
from mesa_places.core.auth.tokens import TokenService

__all__ = ["TokenService", "hash_password", "verify_password"]
