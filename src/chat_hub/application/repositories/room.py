from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from chat_hub.domain.entities.room import Room


class RoomReader(Protocol):
    async def get_by_id(self, room_id: UUID) -> Room | None: ...

    async def get_common(self, name: str) -> Room | None:
        """The company-wide group room (no creator) with the given name."""
        ...

    async def list_for_user(self, user_id: UUID) -> list[Room]: ...


class RoomWriter(Protocol):
    async def create(self, room: Room) -> Room: ...

    async def get_or_create_private(self, room: Room) -> tuple[Room, bool]:
        """Insert a private room unless one with the same ``private_key`` exists.

        Returns (room, created).
        """
        ...

    async def update(
        self,
        room_id: UUID,
        *,
        name: str | None,
        photo_url: str | None,
        updated_at: datetime,
    ) -> Room | None: ...

    async def delete(self, room_id: UUID) -> bool: ...
