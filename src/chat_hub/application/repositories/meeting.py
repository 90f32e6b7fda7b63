from __future__ import annotations

from typing import Protocol
from uuid import UUID

from chat_hub.domain.entities.meeting import Meeting


class MeetingReader(Protocol):
    async def get_by_id(self, meeting_id: UUID) -> Meeting | None: ...

    async def list_for_user(self, user_id: UUID) -> list[Meeting]: ...


class MeetingWriter(Protocol):
    async def create(self, meeting: Meeting) -> Meeting: ...
