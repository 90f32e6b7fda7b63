from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Room:
    id: UUID
    name: str | None
    kind: str
    photo_url: str | None
    created_by: UUID | None
    private_key: str | None
    created_at: datetime
    updated_at: datetime
