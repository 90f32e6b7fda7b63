"""Fan-out of events to every open connection."""
from __future__ import annotations

import logging
from typing import Any, Collection

from chat_hub.infrastructure.ws.protocol import WsOutbound
from chat_hub.infrastructure.ws.registry import ConnectionRegistry

logger = logging.getLogger(__name__)


class WebSocketBroadcaster:
    """Implements application.ports.broadcaster.Broadcaster over the registry.

    There is no per-room routing: every client receives every event and
    filters on its side. Frames are only queued here, never awaited, so each
    connection sees events in the order they were issued and no caller waits
    on a slow socket.
    """

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ConnectionRegistry:
        return self._registry

    async def broadcast(self, event_type: str, data: Any) -> None:
        raw = WsOutbound(type=event_type, data=data).model_dump_json()
        await self.relay(raw)

    async def relay(self, raw: str, *, exclude: Collection[Any] = ()) -> None:
        for ws in self._registry.open_connections(exclude=exclude):
            if not self._registry.enqueue(ws, raw):
                logger.warning("WS outbox full, dropping connection")
                self._registry.remove(ws)
