"""What a client should refetch when a broadcast arrives.

Broadcast payloads are hints, not state: a client drops the matching cached
queries and reads them again. Clients keep polling the same queries on
``POLL_INTERVALS`` even while the socket is up, since the socket carries no
delivery guarantee.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable, Mapping

from chat_hub.client.call_session import CallSession
from chat_hub.domain.value_objects.enums import SIGNALING_FRAMES, EventType

logger = logging.getLogger(__name__)

QueryKey = tuple[str, ...]

POLL_INTERVALS: dict[str, float] = {
    "messages": 2.0,
    "rooms": 3.0,
    "notifications": 30.0,
}


def invalidations_for(event: Mapping[str, Any]) -> list[QueryKey]:
    """Query keys made stale by ``event``; a shorter key covers all longer ones."""
    kind = event.get("type")
    data = event.get("data")
    room_id = data.get("roomId") if isinstance(data, Mapping) else None

    if kind in (EventType.NEW_MESSAGE, EventType.MESSAGE_UPDATED):
        messages: QueryKey = ("messages", str(room_id)) if room_id else ("messages",)
        return [messages, ("rooms",)]
    if kind == EventType.MESSAGE_DELETED:
        return [("messages",), ("rooms",)]
    if kind in (EventType.REACTION_ADDED, EventType.REACTION_REMOVED):
        return [("messages",)]
    if kind == EventType.NEW_NOTIFICATION:
        return [("notifications",)]
    if kind == EventType.NEW_MEETING:
        return [("meetings",), ("rooms",), ("notifications",)]
    if kind in (EventType.EMPLOYEE_STATUS_UPDATE, EventType.AUX_STATUS_UPDATE):
        return [("active-employees",)]
    return []


def covers(invalidated: QueryKey, key: QueryKey) -> bool:
    return key[: len(invalidated)] == invalidated


Invalidate = Callable[[QueryKey], Awaitable[None]]


class Reconciler:
    """Routes inbound socket frames to query invalidation or the call session."""

    def __init__(self, invalidate: Invalidate, call_session: CallSession | None = None) -> None:
        self._invalidate = invalidate
        self._call_session = call_session

    async def handle_raw(self, raw: str) -> None:
        try:
            event = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring non-JSON frame from server")
            return
        if not isinstance(event, dict):
            return

        kind = event.get("type")
        if isinstance(kind, str) and kind in SIGNALING_FRAMES:
            if self._call_session is not None:
                await self._call_session.handle_frame(event)
            return

        for key in invalidations_for(event):
            await self._invalidate(key)
