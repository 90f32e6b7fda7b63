from __future__ import annotations

from chat_hub.domain.entities.room import Room
from chat_hub.infrastructure.db.models.room import RoomModel


def model_to_entity(model: RoomModel) -> Room:
    return Room(
        id=model.id,
        name=model.name,
        kind=model.kind,
        photo_url=model.photo_url,
        created_by=model.created_by,
        private_key=model.private_key,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def entity_to_model(entity: Room) -> RoomModel:
    return RoomModel(
        id=entity.id,
        name=entity.name,
        kind=entity.kind,
        photo_url=entity.photo_url,
        created_by=entity.created_by,
        private_key=entity.private_key,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )
