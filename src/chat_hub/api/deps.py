"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from chat_hub.application.dto.principal import Principal
from chat_hub.application.ports.auth import TokenVerifier
from chat_hub.application.ports.broadcaster import Broadcaster
from chat_hub.config import settings
from chat_hub.infrastructure.auth.hs256_verifier import HS256Verifier
from chat_hub.infrastructure.db.session import AsyncSessionLocal
from chat_hub.infrastructure.db.uow import SqlAlchemyUoW
from chat_hub.infrastructure.ws.broadcaster import WebSocketBroadcaster
from chat_hub.infrastructure.ws.registry import ConnectionRegistry
from chat_hub.infrastructure.ws.signal_router import SignalRouter

_bearer_scheme = HTTPBearer()

registry = ConnectionRegistry(
    send_timeout=settings.WS_SEND_TIMEOUT,
    max_pending=settings.WS_OUTBOX_SIZE,
)
broadcaster = WebSocketBroadcaster(registry)
signal_router = SignalRouter(broadcaster)


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_broadcaster() -> Broadcaster:
    return broadcaster


BroadcasterDep = Annotated[Broadcaster, Depends(get_broadcaster)]


_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM)
    return _verifier


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(_bearer_scheme)],
) -> Principal:
    verifier = get_verifier()
    try:
        return await verifier.verify(credentials.credentials)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
