from __future__ import annotations

import uuid
from datetime import datetime, timezone

from chat_hub.application.dto.message import SendMessageDTO
from chat_hub.application.dto.payloads import MessageDeletedPayload, MessagePayload
from chat_hub.application.dto.principal import Principal
from chat_hub.application.exceptions import NotFoundError, ValidationError
from chat_hub.application.policies.permissions import (
    assert_message_author,
    assert_room_access,
)
from chat_hub.application.ports.broadcaster import Broadcaster
from chat_hub.application.uow import UnitOfWork
from chat_hub.domain.entities.message import Message
from chat_hub.domain.value_objects.enums import EventType


def _has_text(content: str | None) -> bool:
    return bool(content and content.strip())


async def send_message(
    principal: Principal,
    dto: SendMessageDTO,
    uow: UnitOfWork,
    broadcaster: Broadcaster,
) -> Message:
    """Persist a message, then announce it with one ``new_message`` event.

    Nothing is broadcast unless the commit succeeded.
    """
    room = await uow.rooms.get_by_id(dto.room_id)
    await assert_room_access(principal, room, uow.members)

    if not _has_text(dto.content) and not dto.attachments:
        raise ValidationError("Message content is required unless attachments are present")

    if dto.reply_to is not None:
        parent = await uow.messages.get_by_id(dto.reply_to)
        if parent is None or parent.room_id != dto.room_id:
            raise ValidationError("Replies must reference a message of the same room")

    msg = Message(
        id=uuid.uuid4(),
        room_id=dto.room_id,
        sender_id=principal.user_id,
        content=dto.content,
        kind=dto.kind.value,
        attachments=tuple(dto.attachments),
        reply_to=dto.reply_to,
        created_at=datetime.now(timezone.utc),
    )
    msg = await uow.messages_w.create(msg)
    await uow.commit()

    await broadcaster.broadcast(
        EventType.NEW_MESSAGE,
        MessagePayload.model_validate(msg).to_wire(),
    )
    return msg


async def list_messages(
    room_id: uuid.UUID,
    principal: Principal,
    limit: int,
    uow: UnitOfWork,
) -> list[Message]:
    room = await uow.rooms.get_by_id(room_id)
    await assert_room_access(principal, room, uow.members)
    return await uow.messages.list_messages(room_id, limit=limit)


async def edit_message(
    message_id: uuid.UUID,
    principal: Principal,
    content: str,
    uow: UnitOfWork,
    broadcaster: Broadcaster,
) -> Message:
    msg = assert_message_author(principal, await uow.messages.get_by_id(message_id))
    if not _has_text(content) and not msg.attachments:
        raise ValidationError("Message content is required unless attachments are present")

    updated = await uow.messages_w.update_content(
        msg.id, content, datetime.now(timezone.utc),
    )
    if updated is None:
        raise NotFoundError("Message not found")
    await uow.commit()

    await broadcaster.broadcast(
        EventType.MESSAGE_UPDATED,
        MessagePayload.model_validate(updated).to_wire(),
    )
    return updated


async def delete_message(
    message_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
    broadcaster: Broadcaster,
) -> None:
    msg = assert_message_author(principal, await uow.messages.get_by_id(message_id))
    if not await uow.messages_w.delete(msg.id):
        raise NotFoundError("Message not found")
    await uow.commit()

    await broadcaster.broadcast(
        EventType.MESSAGE_DELETED,
        MessageDeletedPayload(message_id=msg.id).to_wire(),
    )
