from __future__ import annotations

from typing import Any, Collection, Protocol


class Broadcaster(Protocol):
    """Unaddressed push to every open realtime connection.

    Delivery is best effort. Clients also poll the read endpoints, so nothing
    may depend on a broadcast being received.
    """

    async def broadcast(self, event_type: str, data: Any) -> None: ...

    async def relay(self, raw: str, *, exclude: Collection[Any] = ()) -> None:
        """Send an already-serialized frame unchanged."""
        ...
