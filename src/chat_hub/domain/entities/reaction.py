from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Reaction:
    id: UUID
    message_id: UUID
    user_id: UUID
    emoji: str
    created_at: datetime
