# mesa_places/infra/http_session.py
"""
Общая HTTP-сессия aiohttp для внешних API (Google Places, Facebook Graph).
"""

from __future__ import annotations

import asyncio

import aiohttp

from mesa_places.common.constants import TypeMsg
from mesa_places.common.logger import log_info, log_warning

_SESSION_LOCK = asyncio.Lock()
_SESSION: aiohttp.ClientSession | None = None


async def get_http_session() -> aiohttp.ClientSession:
    """Возвращает (и создаёт при необходимости) общий HTTP-клиент."""

    global _SESSION
    if _SESSION is not None and not _SESSION.closed:
        return _SESSION

    async with _SESSION_LOCK:
        if _SESSION is None or _SESSION.closed:
            _SESSION = aiohttp.ClientSession()
            await log_info("HTTP-сессия создана", type_msg=TypeMsg.DEBUG)

    return _SESSION


async def close_http_session() -> None:
    """Аккуратно закрывает общую HTTP-сессию."""

    global _SESSION
    if _SESSION is None:
        return
    try:
        await _SESSION.close()
        await log_info("HTTP-сессия закрыта", type_msg=TypeMsg.DEBUG)
    except aiohttp.ClientError as error:
        await log_warning(f"Не удалось закрыть HTTP-сессию: {error}")
    finally:
        _SESSION = None
