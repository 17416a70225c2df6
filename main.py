#!/usr/bin/env python3
# main.py
"""
Точка входа Mesa places API.
Запускает FastAPI приложение (GraphQL + подписки) через uvicorn.
"""

from __future__ import annotations

import asyncio

from mesa_places.common.constants import TypeMsg
from mesa_places.common.logger import log_info, setup_logging
from mesa_places.config import settings


async def run_api() -> None:
    """Запускает GraphQL API."""
    import uvicorn

    await log_info(
        f"Запуск Mesa places API на {settings.server.HOST}:{settings.server.PORT}...",
        type_msg=TypeMsg.INFO,
    )

    config = uvicorn.Config(
        "mesa_places.api.app:app",
        host=settings.server.HOST,
        port=settings.server.PORT,
        reload=settings.system.DEBUG,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    try:
        await server.serve()
    except asyncio.CancelledError:
        await log_info("Mesa places API: graceful shutdown", type_msg=TypeMsg.DEBUG)
        await server.shutdown()


def main() -> None:
    setup_logging()
    try:
        asyncio.run(run_api())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
