from __future__ import annotations

from chat_hub.domain.entities.user import User
from chat_hub.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        username=model.username,
        full_name=model.full_name,
        department=model.department,
        is_active=model.is_active,
    )
