from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Meeting:
    id: UUID
    title: str
    description: str | None
    meeting_link: str
    scheduled_by: UUID
    start_time: datetime
    end_time: datetime | None
    created_at: datetime
    participant_ids: tuple[UUID, ...] = field(default_factory=tuple)
