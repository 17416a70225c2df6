# mesa_places/api/app.py
"""
FastAPI приложение Mesa places.

Endpoints:
- POST/GET /graphql - GraphQL (GraphiQL в режиме DEBUG), также WebSocket
- WS /subscriptions - подписки (graphql-ws и graphql-transport-ws)
- GET /health - проверка здоровья сервиса и БД
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from mesa_places.api.dependencies import get_database
from mesa_places.api.graphql.context import get_context
from mesa_places.api.graphql.schema import schema
from mesa_places.api.middleware.auth import AuthMiddleware
from mesa_places.common.constants import TypeMsg
from mesa_places.common.logger import log_info, setup_logging
from mesa_places.config import settings
from mesa_places.infra.database import close_db, init_db
from mesa_places.infra.http_session import close_http_session

SUBSCRIPTION_PROTOCOLS = (GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL)


# === LIFESPAN ===

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Жизненный цикл приложения."""
    setup_logging()
    await log_info(f"Запуск {settings.system.PROJECT_NAME}...", type_msg=TypeMsg.INFO)
    await init_db()

    yield

    await log_info(f"Остановка {settings.system.PROJECT_NAME}...", type_msg=TypeMsg.INFO)
    await close_http_session()
    await close_db()


def _graphql_router() -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.system.DEBUG else None,
        subscription_protocols=SUBSCRIPTION_PROTOCOLS,
    )


# === APP ===

app = FastAPI(
    title="Mesa places API",
    description="GraphQL API: поиск мест, отзывы, избранное и профиль пользователя.",
    version=settings.system.VERSION,
    lifespan=lifespan,
)

# Порядок: CORS снаружи, аутентификация внутри
app.add_middleware(AuthMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.server.CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(_graphql_router(), prefix=settings.server.GRAPHQL_PATH)
app.include_router(_graphql_router(), prefix=settings.server.SUBSCRIPTIONS_PATH)


# === HEALTH CHECK ===

@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, Any]:
    """Проверка здоровья сервиса."""
    database_ok = await get_database().health_check()
    return {
        "status": "ok" if database_ok else "degraded",
        "service": settings.system.PROJECT_NAME,
        "database": database_ok,
    }
