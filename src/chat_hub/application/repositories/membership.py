from __future__ import annotations

from typing import Protocol
from uuid import UUID

from chat_hub.domain.entities.membership import Membership


class MembershipReader(Protocol):
    async def is_member(self, room_id: UUID, user_id: UUID) -> bool: ...

    async def list_members(self, room_id: UUID) -> list[Membership]: ...


class MembershipWriter(Protocol):
    async def add(self, membership: Membership) -> bool:
        """Add a member. Returns False if the user already belongs to the room."""
        ...

    async def remove(self, room_id: UUID, user_id: UUID) -> bool: ...
