from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Notification:
    id: UUID
    user_id: UUID
    title: str
    message: str
    type: str
    is_read: bool
    metadata: dict[str, Any] | None
    created_at: datetime
