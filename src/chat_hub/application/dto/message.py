from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from chat_hub.domain.entities.message import Attachment
from chat_hub.domain.value_objects.enums import MessageKind


@dataclass(frozen=True, slots=True)
class SendMessageDTO:
    room_id: UUID
    content: str | None = None
    kind: MessageKind = MessageKind.TEXT
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)
    reply_to: UUID | None = None
