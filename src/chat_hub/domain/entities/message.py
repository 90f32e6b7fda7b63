from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Attachment:
    name: str
    type: str
    url: str
    size: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "url": self.url, "size": self.size}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Attachment:
        return cls(
            name=raw.get("name", ""),
            type=raw.get("type", ""),
            url=raw.get("url", ""),
            size=raw.get("size"),
        )


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    room_id: UUID
    sender_id: UUID
    content: str | None
    kind: str
    created_at: datetime
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)
    reply_to: UUID | None = None
    updated_at: datetime | None = None
