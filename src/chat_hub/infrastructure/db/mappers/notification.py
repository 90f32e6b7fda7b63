from __future__ import annotations

from chat_hub.domain.entities.notification import Notification
from chat_hub.infrastructure.db.models.notification import NotificationModel


def model_to_entity(model: NotificationModel) -> Notification:
    return Notification(
        id=model.id,
        user_id=model.user_id,
        title=model.title,
        message=model.message,
        type=model.type,
        is_read=model.is_read,
        metadata=model.extra,
        created_at=model.created_at,
    )


def entity_to_model(entity: Notification) -> NotificationModel:
    return NotificationModel(
        id=entity.id,
        user_id=entity.user_id,
        title=entity.title,
        message=entity.message,
        type=entity.type,
        is_read=entity.is_read,
        extra=entity.metadata,
        created_at=entity.created_at,
    )
