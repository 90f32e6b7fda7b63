from __future__ import annotations

from uuid import UUID

from chat_hub.api.v1.schemas.common import CamelRequest
from chat_hub.domain.value_objects.enums import MessageKind


class AttachmentIn(CamelRequest):
    name: str
    type: str
    url: str
    size: int | None = None


class SendMessageRequest(CamelRequest):
    room_id: UUID
    content: str | None = None
    kind: MessageKind = MessageKind.TEXT
    attachments: list[AttachmentIn] = []
    reply_to: UUID | None = None


class EditMessageRequest(CamelRequest):
    content: str


class ReactionRequest(CamelRequest):
    message_id: UUID
    emoji: str
