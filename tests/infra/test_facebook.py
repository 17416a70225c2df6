# tests/infra/test_facebook.py
"""
Тесты клиента Facebook Graph API.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from mesa_places.common.errors import IdentityLookupError
from mesa_places.infra.facebook import FacebookClient, FacebookIdentity


def make_client(payload=None, error: Exception | None = None) -> tuple[FacebookClient, MagicMock]:
    response = MagicMock()
    response.json = AsyncMock(return_value=payload)

    request_ctx = MagicMock()
    request_ctx.__aenter__ = AsyncMock(return_value=response, side_effect=error)
    request_ctx.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.get = MagicMock(return_value=request_ctx)
    client = FacebookClient("https://graph.test/", session_getter=AsyncMock(return_value=session))
    return client, session


class TestFacebookIdentity:

    def test_is_complete(self) -> None:
        assert FacebookIdentity(email="a@b.c", name="A").is_complete is True
        assert FacebookIdentity(email="a@b.c").is_complete is False
        assert FacebookIdentity().is_complete is False


class TestFetchIdentity:

    @pytest.mark.asyncio
    async def test_returns_email_and_name(self) -> None:
        client, session = make_client({"email": "ana@example.com", "name": "Ana", "id": "1"})

        identity = await client.fetch_identity("fb-token")

        assert identity == FacebookIdentity(email="ana@example.com", name="Ana")
        args, kwargs = session.get.call_args
        assert args[0] == "https://graph.test/me"
        assert kwargs["params"] == {"fields": "email,name", "access_token": "fb-token"}

    @pytest.mark.asyncio
    async def test_graph_error_gives_empty_identity(self) -> None:
        client, _ = make_client({"error": {"message": "Invalid OAuth access token."}})

        identity = await client.fetch_identity("bad")

        assert identity.is_complete is False

    @pytest.mark.asyncio
    async def test_network_error_raises(self) -> None:
        client, _ = make_client(error=aiohttp.ClientConnectionError("down"))

        with pytest.raises(IdentityLookupError):
            await client.fetch_identity("fb-token")
