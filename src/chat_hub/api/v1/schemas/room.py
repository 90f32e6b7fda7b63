from __future__ import annotations

from uuid import UUID

from pydantic import Field

from chat_hub.api.v1.schemas.common import CamelRequest
from chat_hub.domain.value_objects.enums import RoomKind


class CreateRoomRequest(CamelRequest):
    kind: RoomKind = RoomKind.GROUP
    name: str | None = Field(None, max_length=255)
    photo_url: str | None = None
    member_ids: list[UUID] = []


class UpdateRoomRequest(CamelRequest):
    name: str | None = Field(None, max_length=255)
    photo_url: str | None = None


class PrivateRoomRequest(CamelRequest):
    other_user_id: UUID


class AddMemberRequest(CamelRequest):
    user_id: UUID
