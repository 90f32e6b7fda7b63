from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ScheduleMeetingDTO:
    title: str
    meeting_link: str
    start_time: datetime
    end_time: datetime | None = None
    description: str | None = None
    participant_ids: tuple[UUID, ...] = field(default_factory=tuple)
