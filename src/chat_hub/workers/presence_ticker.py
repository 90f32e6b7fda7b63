"""Periodic presence snapshot pushed to every connection."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from chat_hub.application.ports.broadcaster import Broadcaster
from chat_hub.domain.value_objects.enums import EventType

logger = logging.getLogger(__name__)

SnapshotSource = Callable[[], Awaitable[list[dict[str, Any]]]]
Sleep = Callable[[float], Awaitable[None]]


class PresenceTicker:
    """Broadcasts ``employee_status_update`` every ``interval`` seconds.

    The snapshot is pushed whether or not it changed. A tick that fails to
    compute or push the snapshot is skipped; the loop keeps its schedule.
    """

    def __init__(
        self,
        snapshot: SnapshotSource,
        broadcaster: Broadcaster,
        interval: float,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._snapshot = snapshot
        self._broadcaster = broadcaster
        self._interval = interval
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        self._task = asyncio.create_task(self.run(), name="presence-ticker")
        logger.info("Presence ticker started (interval=%.1fs)", self._interval)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Presence ticker stopped")

    async def run(self) -> None:
        while True:
            await self._sleep(self._interval)
            await self.tick()

    async def tick(self) -> bool:
        """Compute and push one snapshot. Returns False if the tick was skipped."""
        try:
            data = await self._snapshot()
        except Exception:
            logger.exception("Presence snapshot failed, skipping tick")
            return False
        try:
            await self._broadcaster.broadcast(EventType.EMPLOYEE_STATUS_UPDATE, data)
        except Exception:
            logger.exception("Presence broadcast failed, skipping tick")
            return False
        return True
