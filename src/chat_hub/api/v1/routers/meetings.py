from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from chat_hub.api.deps import BroadcasterDep, CurrentPrincipal, UoWDep
from chat_hub.api.v1.schemas.meeting import ScheduleMeetingRequest
from chat_hub.application.dto.meeting import ScheduleMeetingDTO
from chat_hub.application.dto.payloads import MeetingPayload
from chat_hub.services import meeting_service

router = APIRouter(prefix="/api/v1/chat/meetings", tags=["meetings"])


@router.post("", response_model=MeetingPayload, status_code=201)
async def schedule_meeting(
    body: ScheduleMeetingRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    broadcaster: BroadcasterDep,
) -> MeetingPayload:
    dto = ScheduleMeetingDTO(
        title=body.title,
        meeting_link=body.meeting_link,
        start_time=body.start_time,
        end_time=body.end_time,
        description=body.description,
        participant_ids=tuple(body.participant_ids),
    )
    meeting = await meeting_service.schedule_meeting(principal, dto, uow, broadcaster)
    return MeetingPayload.model_validate(meeting)


@router.get("", response_model=list[MeetingPayload])
async def list_meetings(principal: CurrentPrincipal, uow: UoWDep) -> list[MeetingPayload]:
    meetings = await meeting_service.list_meetings(principal, uow)
    return [MeetingPayload.model_validate(m) for m in meetings]


@router.get("/{meeting_id}", response_model=MeetingPayload)
async def get_meeting(
    meeting_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MeetingPayload:
    meeting = await meeting_service.get_meeting(meeting_id, principal, uow)
    return MeetingPayload.model_validate(meeting)
