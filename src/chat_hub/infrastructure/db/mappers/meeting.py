from __future__ import annotations

from uuid import UUID

from chat_hub.domain.entities.meeting import Meeting
from chat_hub.infrastructure.db.models.meeting import MeetingModel


def model_to_entity(model: MeetingModel, participant_ids: tuple[UUID, ...] = ()) -> Meeting:
    return Meeting(
        id=model.id,
        title=model.title,
        description=model.description,
        meeting_link=model.meeting_link,
        scheduled_by=model.scheduled_by,
        start_time=model.start_time,
        end_time=model.end_time,
        created_at=model.created_at,
        participant_ids=participant_ids,
    )


def entity_to_model(entity: Meeting) -> MeetingModel:
    return MeetingModel(
        id=entity.id,
        title=entity.title,
        description=entity.description,
        meeting_link=entity.meeting_link,
        scheduled_by=entity.scheduled_by,
        start_time=entity.start_time,
        end_time=entity.end_time,
        created_at=entity.created_at,
    )
