from __future__ import annotations

import asyncio
import uuid

import pytest

from chat_hub.application.dto.room import CreateRoomDTO
from chat_hub.application.exceptions import ForbiddenError, NotFoundError, ValidationError
from chat_hub.domain.value_objects.enums import RoomKind
from chat_hub.domain.value_objects.ids import private_room_key
from chat_hub.services import room_service
from tests.conftest import FakeUoW, make_room, make_user


@pytest.fixture
def uow(user_principal, other_principal):
    uow = FakeUoW()
    uow.add_user(make_user(user_id=user_principal.user_id, username="alex"))
    uow.add_user(make_user(user_id=other_principal.user_id, username="sam"))
    return uow


def test_private_room_key_is_order_independent():
    a, b = uuid.uuid4(), uuid.uuid4()
    assert private_room_key(a, b) == private_room_key(b, a)


@pytest.mark.asyncio
async def test_private_room_is_created_once_per_pair(uow, user_principal, other_principal):
    first = await room_service.get_or_create_private_room(
        user_principal, other_principal.user_id, uow,
    )
    second = await room_service.get_or_create_private_room(
        other_principal, user_principal.user_id, uow,
    )

    assert first.id == second.id
    assert first.kind == RoomKind.PRIVATE
    assert len(uow.rooms._store) == 1
    members = {m.user_id for m in await uow.members.list_members(first.id)}
    assert members == {user_principal.user_id, other_principal.user_id}
    assert uow._commits == 1


@pytest.mark.asyncio
async def test_concurrent_private_room_requests_converge(uow, user_principal, other_principal):
    rooms = await asyncio.gather(
        room_service.get_or_create_private_room(user_principal, other_principal.user_id, uow),
        room_service.get_or_create_private_room(other_principal, user_principal.user_id, uow),
    )

    assert rooms[0].id == rooms[1].id
    assert len(uow.rooms._store) == 1


@pytest.mark.asyncio
async def test_private_room_with_self_is_rejected(uow, user_principal):
    with pytest.raises(ValidationError):
        await room_service.get_or_create_private_room(user_principal, user_principal.user_id, uow)


@pytest.mark.asyncio
async def test_private_room_with_unknown_user(uow, user_principal):
    with pytest.raises(NotFoundError):
        await room_service.get_or_create_private_room(user_principal, uuid.uuid4(), uow)


@pytest.mark.asyncio
async def test_create_group_adds_creator(uow, user_principal, other_principal):
    room = await room_service.create_room(
        user_principal,
        CreateRoomDTO(name="design", member_ids=(other_principal.user_id,)),
        uow,
    )

    assert room.created_by == user_principal.user_id
    members = {m.user_id for m in await uow.members.list_members(room.id)}
    assert members == {user_principal.user_id, other_principal.user_id}


@pytest.mark.asyncio
async def test_create_group_alone_is_rejected(uow, user_principal):
    with pytest.raises(ValidationError):
        await room_service.create_room(user_principal, CreateRoomDTO(name="solo"), uow)


@pytest.mark.asyncio
async def test_create_private_through_create_room_reuses_pair(uow, user_principal, other_principal):
    dto = CreateRoomDTO(kind=RoomKind.PRIVATE, member_ids=(other_principal.user_id,))
    first = await room_service.create_room(user_principal, dto, uow)
    second = await room_service.get_or_create_private_room(
        other_principal, user_principal.user_id, uow,
    )
    assert first.id == second.id


@pytest.mark.asyncio
async def test_listing_rooms_joins_common_room(uow, user_principal, other_principal):
    rooms = await room_service.list_user_rooms(user_principal, "general", uow)
    assert [r.name for r in rooms] == ["general"]

    await room_service.list_user_rooms(other_principal, "general", uow)
    common = await uow.rooms.get_common("general")
    members = {m.user_id for m in await uow.members.list_members(common.id)}
    assert members == {user_principal.user_id, other_principal.user_id}
    assert len(uow.rooms._store) == 1


@pytest.mark.asyncio
async def test_listing_again_does_not_commit(uow, user_principal):
    await room_service.list_user_rooms(user_principal, "general", uow)
    commits = uow._commits
    await room_service.list_user_rooms(user_principal, "general", uow)
    assert uow._commits == commits


@pytest.mark.asyncio
async def test_get_room_requires_membership(uow, user_principal, admin_principal):
    room = uow.add_room(make_room(created_by=uuid.uuid4()))

    with pytest.raises(ForbiddenError):
        await room_service.get_room(room.id, user_principal, uow)
    assert await room_service.get_room(room.id, admin_principal, uow) == room


@pytest.mark.asyncio
async def test_update_room_only_by_creator(uow, user_principal, other_principal):
    room = uow.add_room(
        make_room(created_by=user_principal.user_id),
        user_principal.user_id,
        other_principal.user_id,
    )

    with pytest.raises(ForbiddenError):
        await room_service.update_room(room.id, other_principal, "renamed", None, uow)

    updated = await room_service.update_room(room.id, user_principal, "renamed", None, uow)
    assert updated.name == "renamed"


@pytest.mark.asyncio
async def test_delete_room(uow, user_principal):
    room = uow.add_room(make_room(created_by=user_principal.user_id), user_principal.user_id)
    await room_service.delete_room(room.id, user_principal, uow)
    assert room.id not in uow.rooms._store


@pytest.mark.asyncio
async def test_member_can_leave_but_not_kick(uow, user_principal, other_principal):
    third = make_user(username="riley")
    uow.add_user(third)
    room = uow.add_room(
        make_room(created_by=user_principal.user_id),
        user_principal.user_id,
        other_principal.user_id,
        third.id,
    )

    with pytest.raises(ForbiddenError):
        await room_service.remove_member(room.id, other_principal, third.id, uow)

    await room_service.remove_member(room.id, other_principal, other_principal.user_id, uow)
    assert not await uow.members.is_member(room.id, other_principal.user_id)

    await room_service.remove_member(room.id, user_principal, third.id, uow)
    assert not await uow.members.is_member(room.id, third.id)


@pytest.mark.asyncio
async def test_add_member_to_private_room_is_rejected(uow, user_principal, other_principal):
    room = await room_service.get_or_create_private_room(
        user_principal, other_principal.user_id, uow,
    )
    third = uow.add_user(make_user(username="riley"))

    with pytest.raises(ValidationError):
        await room_service.add_member(room.id, user_principal, third.id, uow)


@pytest.mark.asyncio
async def test_add_member(uow, user_principal):
    room = uow.add_room(make_room(created_by=user_principal.user_id), user_principal.user_id)
    newcomer = uow.add_user(make_user(username="riley"))

    await room_service.add_member(room.id, user_principal, newcomer.id, uow)

    assert await uow.members.is_member(room.id, newcomer.id)
