"""Dispatch of inbound realtime frames."""
from __future__ import annotations

import logging

from pydantic import ValidationError

from chat_hub.application.ports.broadcaster import Broadcaster
from chat_hub.domain.value_objects.enums import SIGNALING_FRAMES, EventType
from chat_hub.infrastructure.ws.protocol import (
    AuxUpdateFrame,
    SubscribeFrame,
    inbound_frame_adapter,
)
from chat_hub.infrastructure.ws.registry import Connection

logger = logging.getLogger(__name__)

_UNKNOWN_TAG_ERRORS = frozenset({"union_tag_invalid", "union_tag_not_found"})


class SignalRouter:
    """Fire-and-forget handling of client frames.

    Nothing is ever sent back to the sender on failure. Call signaling frames
    are relayed untouched to all other connections; the server never learns
    who is in a call.
    """

    def __init__(self, broadcaster: Broadcaster) -> None:
        self._broadcaster = broadcaster

    async def on_frame(self, connection: Connection, raw: str) -> None:
        try:
            frame = inbound_frame_adapter.validate_json(raw)
        except ValidationError as exc:
            error_types = {err["type"] for err in exc.errors()}
            if error_types <= _UNKNOWN_TAG_ERRORS:
                logger.debug("Ignoring frame of unknown type")
            else:
                logger.warning("Dropping malformed WS frame: %s", error_types)
            return

        if isinstance(frame, SubscribeFrame):
            return

        if isinstance(frame, AuxUpdateFrame):
            await self._broadcaster.broadcast(EventType.AUX_STATUS_UPDATE, frame.payload)

        elif frame.type in SIGNALING_FRAMES:
            await self._broadcaster.relay(raw, exclude=(connection,))
