from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from chat_hub.application.dto.principal import Principal
from chat_hub.application.dto.room import CreateRoomDTO
from chat_hub.application.exceptions import NotFoundError, ValidationError
from chat_hub.application.policies.permissions import (
    assert_room_access,
    assert_room_manager,
)
from chat_hub.application.uow import UnitOfWork
from chat_hub.domain.entities.membership import Membership
from chat_hub.domain.entities.room import Room
from chat_hub.domain.value_objects.enums import RoomKind
from chat_hub.domain.value_objects.ids import private_room_key

logger = logging.getLogger(__name__)


async def ensure_private_room(
    user_id: uuid.UUID,
    other_user_id: uuid.UUID,
    uow: UnitOfWork,
) -> tuple[Room, bool]:
    """Get-or-create the 1:1 room of an unordered user pair without committing."""
    if user_id == other_user_id:
        raise ValidationError("A private room needs two different users")

    now = datetime.now(timezone.utc)
    candidate = Room(
        id=uuid.uuid4(),
        name=None,
        kind=RoomKind.PRIVATE,
        photo_url=None,
        created_by=user_id,
        private_key=private_room_key(user_id, other_user_id),
        created_at=now,
        updated_at=now,
    )
    room, created = await uow.rooms_w.get_or_create_private(candidate)
    if created:
        for member_id in (user_id, other_user_id):
            await uow.members_w.add(
                Membership(room_id=room.id, user_id=member_id, joined_at=now)
            )
    return room, created


async def get_or_create_private_room(
    principal: Principal,
    other_user_id: uuid.UUID,
    uow: UnitOfWork,
) -> Room:
    """Return the private room shared with ``other_user_id``, creating it once."""
    if await uow.users.get_by_id(other_user_id) is None:
        raise NotFoundError("User not found")

    room, created = await ensure_private_room(principal.user_id, other_user_id, uow)
    if created:
        await uow.commit()
        logger.info("Created private room %s", room.id)
    return room


async def create_room(
    principal: Principal,
    dto: CreateRoomDTO,
    uow: UnitOfWork,
) -> Room:
    member_ids = {principal.user_id, *dto.member_ids}

    if dto.kind == RoomKind.PRIVATE:
        others = member_ids - {principal.user_id}
        if len(others) != 1:
            raise ValidationError("A private room has exactly two members")
        return await get_or_create_private_room(principal, others.pop(), uow)

    if len(member_ids) < 2:
        raise ValidationError("A group room needs at least two members")

    now = datetime.now(timezone.utc)
    room = Room(
        id=uuid.uuid4(),
        name=dto.name,
        kind=RoomKind.GROUP,
        photo_url=dto.photo_url,
        created_by=principal.user_id,
        private_key=None,
        created_at=now,
        updated_at=now,
    )
    room = await uow.rooms_w.create(room)
    for member_id in member_ids:
        await uow.members_w.add(Membership(room_id=room.id, user_id=member_id, joined_at=now))
    await uow.commit()
    return room


async def ensure_in_common_room(
    principal: Principal,
    common_room_name: str,
    uow: UnitOfWork,
) -> Room:
    """Every employee belongs to the company-wide room; join lazily on first listing."""
    now = datetime.now(timezone.utc)
    changed = False

    room = await uow.rooms.get_common(common_room_name)
    if room is None:
        room = await uow.rooms_w.create(
            Room(
                id=uuid.uuid4(),
                name=common_room_name,
                kind=RoomKind.GROUP,
                photo_url=None,
                created_by=None,
                private_key=None,
                created_at=now,
                updated_at=now,
            )
        )
        changed = True

    joined = await uow.members_w.add(
        Membership(room_id=room.id, user_id=principal.user_id, joined_at=now)
    )
    if changed or joined:
        await uow.commit()
    return room


async def list_user_rooms(
    principal: Principal,
    common_room_name: str,
    uow: UnitOfWork,
) -> list[Room]:
    await ensure_in_common_room(principal, common_room_name, uow)
    return await uow.rooms.list_for_user(principal.user_id)


async def get_room(
    room_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> Room:
    room = await uow.rooms.get_by_id(room_id)
    return await assert_room_access(principal, room, uow.members)


async def update_room(
    room_id: uuid.UUID,
    principal: Principal,
    name: str | None,
    photo_url: str | None,
    uow: UnitOfWork,
) -> Room:
    room = await get_room(room_id, principal, uow)
    assert_room_manager(principal, room)

    updated = await uow.rooms_w.update(
        room.id,
        name=name if name is not None else room.name,
        photo_url=photo_url if photo_url is not None else room.photo_url,
        updated_at=datetime.now(timezone.utc),
    )
    if updated is None:
        raise NotFoundError("Room not found")
    await uow.commit()
    return updated


async def delete_room(
    room_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> None:
    room = await get_room(room_id, principal, uow)
    assert_room_manager(principal, room)

    if not await uow.rooms_w.delete(room.id):
        raise NotFoundError("Room not found")
    await uow.commit()


async def add_member(
    room_id: uuid.UUID,
    principal: Principal,
    user_id: uuid.UUID,
    uow: UnitOfWork,
) -> Membership:
    room = await get_room(room_id, principal, uow)
    if room.kind == RoomKind.PRIVATE:
        raise ValidationError("Private rooms have exactly two members")
    if await uow.users.get_by_id(user_id) is None:
        raise NotFoundError("User not found")

    membership = Membership(
        room_id=room.id,
        user_id=user_id,
        joined_at=datetime.now(timezone.utc),
    )
    if await uow.members_w.add(membership):
        await uow.commit()
    return membership


async def remove_member(
    room_id: uuid.UUID,
    principal: Principal,
    user_id: uuid.UUID,
    uow: UnitOfWork,
) -> None:
    room = await get_room(room_id, principal, uow)
    if room.kind == RoomKind.PRIVATE:
        raise ValidationError("Private rooms have exactly two members")
    # Members may always leave; removing someone else needs manager rights.
    if user_id != principal.user_id:
        assert_room_manager(principal, room)

    if not await uow.members_w.remove(room.id, user_id):
        raise NotFoundError("User is not a member of this room")
    await uow.commit()


async def list_members(
    room_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> list[Membership]:
    room = await get_room(room_id, principal, uow)
    return await uow.members.list_members(room.id)
