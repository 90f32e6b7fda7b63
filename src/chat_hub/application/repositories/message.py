from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from chat_hub.domain.entities.message import Message


class MessageReader(Protocol):
    async def get_by_id(self, message_id: UUID) -> Message | None: ...

    async def list_messages(self, room_id: UUID, *, limit: int = 50) -> list[Message]:
        """Latest ``limit`` messages of a room, oldest first."""
        ...


class MessageWriter(Protocol):
    async def create(self, message: Message) -> Message: ...

    async def update_content(
        self,
        message_id: UUID,
        content: str,
        updated_at: datetime,
    ) -> Message | None: ...

    async def delete(self, message_id: UUID) -> bool: ...
