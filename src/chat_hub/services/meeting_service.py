from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from chat_hub.application.dto.meeting import ScheduleMeetingDTO
from chat_hub.application.dto.payloads import MeetingPayload
from chat_hub.application.dto.principal import Principal
from chat_hub.application.exceptions import ForbiddenError, NotFoundError, ValidationError
from chat_hub.application.ports.broadcaster import Broadcaster
from chat_hub.application.uow import UnitOfWork
from chat_hub.domain.entities.meeting import Meeting
from chat_hub.domain.entities.message import Attachment, Message
from chat_hub.domain.value_objects.enums import EventType, MessageKind
from chat_hub.services.notification_service import add_notification
from chat_hub.services.room_service import ensure_private_room

logger = logging.getLogger(__name__)


async def schedule_meeting(
    principal: Principal,
    dto: ScheduleMeetingDTO,
    uow: UnitOfWork,
    broadcaster: Broadcaster,
) -> Meeting:
    """Create a meeting and invite every participant.

    Each participant gets a ``meeting_link`` message in their private room with
    the organizer and a notification. One ``new_meeting`` event is broadcast.
    """
    if dto.end_time is not None and dto.end_time <= dto.start_time:
        raise ValidationError("Meeting must end after it starts")

    participant_ids = tuple(
        dict.fromkeys(p for p in dto.participant_ids if p != principal.user_id)
    )
    for participant_id in participant_ids:
        if await uow.users.get_by_id(participant_id) is None:
            raise NotFoundError(f"User {participant_id} not found")

    now = datetime.now(timezone.utc)
    meeting = Meeting(
        id=uuid.uuid4(),
        title=dto.title,
        description=dto.description,
        meeting_link=dto.meeting_link,
        scheduled_by=principal.user_id,
        start_time=dto.start_time,
        end_time=dto.end_time,
        created_at=now,
        participant_ids=participant_ids,
    )
    meeting = await uow.meetings_w.create(meeting)

    invite = Attachment(name=meeting.title, type="meeting", url=meeting.meeting_link)
    for participant_id in participant_ids:
        room, _created = await ensure_private_room(principal.user_id, participant_id, uow)
        await uow.messages_w.create(
            Message(
                id=uuid.uuid4(),
                room_id=room.id,
                sender_id=principal.user_id,
                content=f"Meeting scheduled: {meeting.title}",
                kind=MessageKind.MEETING_LINK,
                attachments=(invite,),
                created_at=now,
            )
        )
        await add_notification(
            participant_id,
            "New meeting",
            f"Meeting scheduled: {meeting.title}",
            "info",
            uow,
            metadata={"type": "meeting", "relatedId": str(meeting.id)},
        )

    await uow.commit()
    logger.info("Scheduled meeting %s with %d participants", meeting.id, len(participant_ids))

    await broadcaster.broadcast(
        EventType.NEW_MEETING,
        MeetingPayload.model_validate(meeting).to_wire(),
    )
    return meeting


async def list_meetings(principal: Principal, uow: UnitOfWork) -> list[Meeting]:
    return await uow.meetings.list_for_user(principal.user_id)


async def get_meeting(meeting_id: uuid.UUID, principal: Principal, uow: UnitOfWork) -> Meeting:
    """Visible to the organizer, the participants and admins."""
    meeting = await uow.meetings.get_by_id(meeting_id)
    if meeting is None:
        raise NotFoundError("Meeting not found")
    if principal.is_admin:
        return meeting
    if principal.user_id != meeting.scheduled_by and principal.user_id not in meeting.participant_ids:
        raise ForbiddenError("Not invited to this meeting")
    return meeting
