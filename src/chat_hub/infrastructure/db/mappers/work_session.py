from __future__ import annotations

from chat_hub.domain.entities.work_session import WorkSession
from chat_hub.infrastructure.db.models.work_session import WorkSessionModel


def model_to_entity(model: WorkSessionModel) -> WorkSession:
    return WorkSession(
        id=model.id,
        user_id=model.user_id,
        status=model.status,
        start_time=model.start_time,
        end_time=model.end_time,
        duration_seconds=model.duration_seconds,
        notes=model.notes,
    )


def entity_to_model(entity: WorkSession) -> WorkSessionModel:
    return WorkSessionModel(
        id=entity.id,
        user_id=entity.user_id,
        status=entity.status,
        start_time=entity.start_time,
        end_time=entity.end_time,
        duration_seconds=entity.duration_seconds,
        notes=entity.notes,
    )
