from __future__ import annotations

import uuid
from datetime import datetime, timezone

from chat_hub.application.dto.payloads import ReactionPayload, ReactionRemovedPayload
from chat_hub.application.dto.principal import Principal
from chat_hub.application.exceptions import NotFoundError, ValidationError
from chat_hub.application.policies.permissions import assert_room_access
from chat_hub.application.ports.broadcaster import Broadcaster
from chat_hub.application.uow import UnitOfWork
from chat_hub.domain.entities.message import Message
from chat_hub.domain.entities.reaction import Reaction
from chat_hub.domain.value_objects.enums import EventType

MAX_EMOJI_LENGTH = 32


async def _visible_message(
    message_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> Message:
    msg = await uow.messages.get_by_id(message_id)
    if msg is None:
        raise NotFoundError("Message not found")
    room = await uow.rooms.get_by_id(msg.room_id)
    await assert_room_access(principal, room, uow.members)
    return msg


def _clean_emoji(emoji: str) -> str:
    emoji = emoji.strip()
    if not emoji or len(emoji) > MAX_EMOJI_LENGTH:
        raise ValidationError("Invalid emoji")
    return emoji


async def add_reaction(
    message_id: uuid.UUID,
    principal: Principal,
    emoji: str,
    uow: UnitOfWork,
    broadcaster: Broadcaster,
) -> Reaction:
    """Store a reaction row.

    There is no uniqueness check: reacting twice with the same emoji stores two
    rows, and removing deletes all of them.
    """
    msg = await _visible_message(message_id, principal, uow)
    reaction = Reaction(
        id=uuid.uuid4(),
        message_id=msg.id,
        user_id=principal.user_id,
        emoji=_clean_emoji(emoji),
        created_at=datetime.now(timezone.utc),
    )
    reaction = await uow.reactions_w.add(reaction)
    await uow.commit()

    await broadcaster.broadcast(
        EventType.REACTION_ADDED,
        ReactionPayload.model_validate(reaction).to_wire(),
    )
    return reaction


async def remove_reaction(
    message_id: uuid.UUID,
    principal: Principal,
    emoji: str,
    uow: UnitOfWork,
    broadcaster: Broadcaster,
) -> int:
    emoji = _clean_emoji(emoji)
    removed = await uow.reactions_w.remove(message_id, principal.user_id, emoji)
    await uow.commit()

    await broadcaster.broadcast(
        EventType.REACTION_REMOVED,
        ReactionRemovedPayload(
            message_id=message_id,
            user_id=principal.user_id,
            emoji=emoji,
        ).to_wire(),
    )
    return removed


async def list_reactions(
    message_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> list[Reaction]:
    msg = await _visible_message(message_id, principal, uow)
    return await uow.reactions.list_for_message(msg.id)
