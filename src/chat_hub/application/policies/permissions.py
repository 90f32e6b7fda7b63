from __future__ import annotations

from chat_hub.application.dto.principal import Principal
from chat_hub.application.exceptions import ForbiddenError, NotFoundError
from chat_hub.application.repositories.membership import MembershipReader
from chat_hub.domain.entities.message import Message
from chat_hub.domain.entities.room import Room


async def assert_room_access(
    principal: Principal,
    room: Room | None,
    members: MembershipReader,
) -> Room:
    """Raise if the room doesn't exist or the principal is not a member."""
    if room is None:
        raise NotFoundError("Room not found")

    # Admins read every room
    if principal.is_admin:
        return room

    if not await members.is_member(room.id, principal.user_id):
        raise ForbiddenError("Not a member of this room")

    return room


def assert_message_author(principal: Principal, message: Message | None) -> Message:
    if message is None:
        raise NotFoundError("Message not found")
    if message.sender_id != principal.user_id:
        raise ForbiddenError("Only the sender can change this message")
    return message


def assert_room_manager(principal: Principal, room: Room) -> None:
    if principal.is_admin or room.created_by == principal.user_id:
        return
    raise ForbiddenError("Only the room creator can change this room")
