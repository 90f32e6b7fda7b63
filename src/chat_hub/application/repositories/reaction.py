from __future__ import annotations

from typing import Protocol
from uuid import UUID

from chat_hub.domain.entities.reaction import Reaction


class ReactionReader(Protocol):
    async def list_for_message(self, message_id: UUID) -> list[Reaction]: ...


class ReactionWriter(Protocol):
    async def add(self, reaction: Reaction) -> Reaction:
        """Plain insert: the same (message, user, emoji) may be stored twice."""
        ...

    async def remove(self, message_id: UUID, user_id: UUID, emoji: str) -> int: ...
