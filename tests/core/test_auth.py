# tests/core/test_auth.py
"""
Тесты токенов и хэширования паролей.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from mesa_places.common.constants import UNUSABLE_PASSWORD
from mesa_places.common.errors import TokenError
from mesa_places.core.auth.passwords import hash_password, verify_password
from mesa_places.core.auth.tokens import TokenService, extract_bearer_token


class TestTokenService:

    def test_requires_secret(self) -> None:
        with pytest.raises(ValueError):
            TokenService(secret="")

    def test_sign_and_verify(self, token_service: TokenService) -> None:
        token = token_service.sign(42)
        assert token_service.verify(token) == 42

    def test_default_lifetime(self, token_service: TokenService) -> None:
        claims = jwt.get_unverified_claims(token_service.sign(1))
        now = datetime.now(timezone.utc).timestamp()
        assert 3500 < claims["exp"] - now <= 3600

    def test_explicit_lifetime(self, token_service: TokenService) -> None:
        claims = jwt.get_unverified_claims(token_service.sign(1, expiration=300))
        now = datetime.now(timezone.utc).timestamp()
        assert 200 < claims["exp"] - now <= 300

    def test_expired_token_rejected(self, token_service: TokenService) -> None:
        expired = jwt.encode(
            {"id": 1, "exp": datetime.now(timezone.utc) - timedelta(seconds=10)},
            "test_jwt_secret",
            algorithm="HS256",
        )
        with pytest.raises(TokenError):
            token_service.verify(expired)

    def test_foreign_signature_rejected(self, token_service: TokenService) -> None:
        other = TokenService(secret="another-secret").sign(1)
        with pytest.raises(TokenError):
            token_service.verify(other)

    def test_garbage_rejected(self, token_service: TokenService) -> None:
        with pytest.raises(TokenError):
            token_service.verify("not-a-jwt")

    def test_missing_id_rejected(self, token_service: TokenService) -> None:
        token = jwt.encode(
            {"sub": "1", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "test_jwt_secret",
            algorithm="HS256",
        )
        with pytest.raises(TokenError):
            token_service.verify(token)


class TestExtractBearerToken:

    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc", "abc"),
            ("bearer abc", "abc"),
            ("Bearer   abc  ", "abc"),
            ("Token abc", None),
            ("Bearer", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extract(self, header, expected) -> None:
        assert extract_bearer_token(header) == expected


class TestPasswords:

    def test_hash_verifies(self, known_password: str, known_password_hash: str) -> None:
        assert known_password_hash != known_password
        assert verify_password(known_password, known_password_hash) is True
        assert verify_password("wrong-password", known_password_hash) is False

    def test_unusable_marker_never_matches(self) -> None:
        """Аккаунт, созданный через OAuth, нельзя открыть паролем."""
        assert verify_password(UNUSABLE_PASSWORD, UNUSABLE_PASSWORD) is False
        assert verify_password("", UNUSABLE_PASSWORD) is False

    def test_empty_hash(self) -> None:
        assert verify_password("anything", "") is False
        assert verify_password("anything", None) is False

    def test_hash_is_salted(self) -> None:
        assert hash_password("same-password") != hash_password("same-password")
