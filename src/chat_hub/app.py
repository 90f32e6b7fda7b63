from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chat_hub.api.deps import broadcaster
from chat_hub.api.middleware.correlation_id import CorrelationIdMiddleware
from chat_hub.api.v1.routers import (
    health,
    meetings,
    messages,
    notifications,
    presence,
    rooms,
    ws,
)
from chat_hub.application.exceptions import AppError
from chat_hub.config import settings
from chat_hub.infrastructure.db.session import AsyncSessionLocal
from chat_hub.infrastructure.db.uow import SqlAlchemyUoW
from chat_hub.services import presence_service
from chat_hub.workers.presence_ticker import PresenceTicker

logger = logging.getLogger(__name__)


async def _presence_snapshot() -> list[dict[str, Any]]:
    async with AsyncSessionLocal() as session:
        return await presence_service.active_snapshot(SqlAlchemyUoW(session))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    ticker: PresenceTicker | None = None
    if settings.PRESENCE_TICKER_ENABLED:
        ticker = PresenceTicker(
            _presence_snapshot,
            broadcaster,
            settings.PRESENCE_TICK_SECONDS,
        )
        await ticker.start()
    app.state.presence_ticker = ticker

    yield

    if ticker is not None:
        await ticker.stop()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Chat Hub",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(rooms.router)
    app.include_router(messages.router)
    app.include_router(notifications.router)
    app.include_router(meetings.router)
    app.include_router(presence.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(_req: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
