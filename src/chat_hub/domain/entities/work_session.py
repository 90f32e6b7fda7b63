from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from chat_hub.domain.entities.user import User


@dataclass(frozen=True, slots=True)
class WorkSession:
    id: UUID
    user_id: UUID
    status: str
    start_time: datetime
    end_time: datetime | None = None
    duration_seconds: int | None = None
    notes: str | None = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True, slots=True)
class ActiveEmployee:
    """One row of the presence snapshot: an open session plus its owner."""

    session: WorkSession
    user: User
