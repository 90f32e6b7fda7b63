"""JSON shapes shared by REST responses and realtime broadcasts.

Field names go out in camelCase (``roomId``, ``messageId``) since the browser
client consumes both channels with the same code.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from chat_hub.domain.entities.work_session import ActiveEmployee


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class AttachmentPayload(WireModel):
    name: str
    type: str
    url: str
    size: int | None = None


class RoomPayload(WireModel):
    id: UUID
    name: str | None
    kind: str
    photo_url: str | None
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime


class MemberPayload(WireModel):
    room_id: UUID
    user_id: UUID
    joined_at: datetime


class MessagePayload(WireModel):
    id: UUID
    room_id: UUID
    sender_id: UUID
    content: str | None
    kind: str
    attachments: list[AttachmentPayload] = []
    reply_to: UUID | None = None
    created_at: datetime
    updated_at: datetime | None = None


class MessageDeletedPayload(WireModel):
    message_id: UUID


class ReactionPayload(WireModel):
    id: UUID
    message_id: UUID
    user_id: UUID
    emoji: str
    created_at: datetime


class ReactionRemovedPayload(WireModel):
    message_id: UUID
    user_id: UUID
    emoji: str


class NotificationPayload(WireModel):
    id: UUID
    user_id: UUID
    title: str
    message: str
    type: str
    is_read: bool
    metadata: dict[str, Any] | None = None
    created_at: datetime


class MeetingPayload(WireModel):
    id: UUID
    title: str
    description: str | None
    meeting_link: str
    scheduled_by: UUID
    start_time: datetime
    end_time: datetime | None
    created_at: datetime
    participant_ids: list[UUID] = []


class UserPayload(WireModel):
    id: UUID
    username: str
    full_name: str
    department: str | None = None


class WorkSessionPayload(WireModel):
    id: UUID
    user_id: UUID
    status: str
    start_time: datetime
    end_time: datetime | None = None
    duration_seconds: int | None = None
    notes: str | None = None


class ActiveEmployeePayload(WorkSessionPayload):
    user: UserPayload

    @classmethod
    def from_entity(cls, active: ActiveEmployee) -> ActiveEmployeePayload:
        session = WorkSessionPayload.model_validate(active.session)
        return cls(
            **session.model_dump(),
            user=UserPayload.model_validate(active.user),
        )
