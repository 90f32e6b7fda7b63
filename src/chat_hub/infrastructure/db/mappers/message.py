from __future__ import annotations

from chat_hub.domain.entities.message import Attachment, Message
from chat_hub.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        room_id=model.room_id,
        sender_id=model.sender_id,
        content=model.content,
        kind=model.message_type,
        attachments=tuple(Attachment.from_dict(a) for a in model.attachments or ()),
        reply_to=model.reply_to,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        room_id=entity.room_id,
        sender_id=entity.sender_id,
        content=entity.content,
        message_type=entity.kind,
        attachments=[a.to_dict() for a in entity.attachments],
        reply_to=entity.reply_to,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )
