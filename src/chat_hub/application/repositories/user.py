from __future__ import annotations

from typing import Protocol
from uuid import UUID

from chat_hub.domain.entities.user import User


class UserReader(Protocol):
    async def get_by_id(self, user_id: UUID) -> User | None: ...
