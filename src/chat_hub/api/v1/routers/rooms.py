from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Response

from chat_hub.api.deps import CurrentPrincipal, UoWDep
from chat_hub.api.v1.schemas.room import (
    AddMemberRequest,
    CreateRoomRequest,
    PrivateRoomRequest,
    UpdateRoomRequest,
)
from chat_hub.application.dto.payloads import MemberPayload, RoomPayload
from chat_hub.application.dto.room import CreateRoomDTO
from chat_hub.config import settings
from chat_hub.services import room_service

router = APIRouter(prefix="/api/v1/chat/rooms", tags=["rooms"])


@router.post("", response_model=RoomPayload, status_code=201)
async def create_room(
    body: CreateRoomRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> RoomPayload:
    dto = CreateRoomDTO(
        kind=body.kind,
        name=body.name,
        photo_url=body.photo_url,
        member_ids=tuple(body.member_ids),
    )
    room = await room_service.create_room(principal, dto, uow)
    return RoomPayload.model_validate(room)


@router.get("", response_model=list[RoomPayload])
async def list_rooms(principal: CurrentPrincipal, uow: UoWDep) -> list[RoomPayload]:
    rooms = await room_service.list_user_rooms(principal, settings.COMMON_ROOM_NAME, uow)
    return [RoomPayload.model_validate(r) for r in rooms]


@router.post("/private", response_model=RoomPayload)
async def get_or_create_private_room(
    body: PrivateRoomRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> RoomPayload:
    room = await room_service.get_or_create_private_room(principal, body.other_user_id, uow)
    return RoomPayload.model_validate(room)


@router.get("/{room_id}", response_model=RoomPayload)
async def get_room(room_id: UUID, principal: CurrentPrincipal, uow: UoWDep) -> RoomPayload:
    room = await room_service.get_room(room_id, principal, uow)
    return RoomPayload.model_validate(room)


@router.patch("/{room_id}", response_model=RoomPayload)
async def update_room(
    room_id: UUID,
    body: UpdateRoomRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> RoomPayload:
    room = await room_service.update_room(room_id, principal, body.name, body.photo_url, uow)
    return RoomPayload.model_validate(room)


@router.delete("/{room_id}", status_code=204)
async def delete_room(room_id: UUID, principal: CurrentPrincipal, uow: UoWDep) -> Response:
    await room_service.delete_room(room_id, principal, uow)
    return Response(status_code=204)


@router.get("/{room_id}/members", response_model=list[MemberPayload])
async def list_members(
    room_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[MemberPayload]:
    members = await room_service.list_members(room_id, principal, uow)
    return [MemberPayload.model_validate(m) for m in members]


@router.post("/{room_id}/members", response_model=MemberPayload, status_code=201)
async def add_member(
    room_id: UUID,
    body: AddMemberRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MemberPayload:
    membership = await room_service.add_member(room_id, principal, body.user_id, uow)
    return MemberPayload.model_validate(membership)


@router.delete("/{room_id}/members/{user_id}", status_code=204)
async def remove_member(
    room_id: UUID,
    user_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> Response:
    await room_service.remove_member(room_id, principal, user_id, uow)
    return Response(status_code=204)
