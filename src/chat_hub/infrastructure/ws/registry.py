"""In-process registry of live realtime connections."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Collection, Protocol

from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """The slice of ``starlette.websockets.WebSocket`` the hub relies on."""

    client_state: WebSocketState
    application_state: WebSocketState

    async def accept(self) -> None: ...

    async def send_text(self, data: str) -> None: ...


def is_open(connection: Connection) -> bool:
    return (
        connection.client_state == WebSocketState.CONNECTED
        and connection.application_state == WebSocketState.CONNECTED
    )


@dataclass(slots=True)
class _Outbox:
    queue: asyncio.Queue[str]
    writer: asyncio.Task[None] | None = None


def _discard_pending(queue: asyncio.Queue[str]) -> None:
    while not queue.empty():
        queue.get_nowait()
        queue.task_done()


class ConnectionRegistry:
    """Every connection admitted on this process.

    Connections are anonymous: no user id or room is attached to them. Only the
    event loop touches the set, so admit/remove need no locking.

    Each connection owns a bounded outbox drained by its own writer task, so a
    slow socket only delays itself. A send that fails, exceeds
    ``send_timeout`` or finds the outbox full drops the connection.
    """

    def __init__(self, *, send_timeout: float = 10.0, max_pending: int = 256) -> None:
        self._outboxes: dict[Connection, _Outbox] = {}
        self._send_timeout = send_timeout
        self._max_pending = max_pending

    async def admit(self, connection: Connection) -> None:
        await connection.accept()
        outbox = _Outbox(queue=asyncio.Queue(maxsize=self._max_pending))
        outbox.writer = asyncio.create_task(self._write_loop(connection, outbox.queue))
        self._outboxes[connection] = outbox
        logger.debug("WS connected (total=%d)", len(self._outboxes))

    def remove(self, connection: Connection) -> None:
        outbox = self._outboxes.pop(connection, None)
        if outbox is None:
            return
        _discard_pending(outbox.queue)
        if outbox.writer is not None and outbox.writer is not asyncio.current_task():
            outbox.writer.cancel()
        logger.debug("WS disconnected (total=%d)", len(self._outboxes))

    def enqueue(self, connection: Connection, raw: str) -> bool:
        """Queue ``raw`` for ``connection``; False if it is unknown or backed up."""
        outbox = self._outboxes.get(connection)
        if outbox is None:
            return False
        try:
            outbox.queue.put_nowait(raw)
        except asyncio.QueueFull:
            return False
        return True

    async def flush(self) -> None:
        """Wait until every queued frame was sent or discarded."""
        await asyncio.gather(*(o.queue.join() for o in list(self._outboxes.values())))

    def open_connections(self, *, exclude: Collection[Any] = ()) -> list[Connection]:
        """Snapshot of open connections; closing ones are skipped."""
        return [
            conn
            for conn in self._outboxes
            if conn not in exclude and is_open(conn)
        ]

    async def _write_loop(self, connection: Connection, queue: asyncio.Queue[str]) -> None:
        while True:
            raw = await queue.get()
            try:
                await asyncio.wait_for(connection.send_text(raw), self._send_timeout)
            except Exception:
                logger.debug("WS send failed, dropping connection", exc_info=True)
                self.remove(connection)
                return
            finally:
                queue.task_done()

    def __contains__(self, connection: object) -> bool:
        return connection in self._outboxes

    def __len__(self) -> int:
        return len(self._outboxes)
