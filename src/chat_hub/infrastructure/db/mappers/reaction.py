from __future__ import annotations

from chat_hub.domain.entities.reaction import Reaction
from chat_hub.infrastructure.db.models.reaction import ReactionModel


def model_to_entity(model: ReactionModel) -> Reaction:
    return Reaction(
        id=model.id,
        message_id=model.message_id,
        user_id=model.user_id,
        emoji=model.emoji,
        created_at=model.created_at,
    )


def entity_to_model(entity: Reaction) -> ReactionModel:
    return ReactionModel(
        id=entity.id,
        message_id=entity.message_id,
        user_id=entity.user_id,
        emoji=entity.emoji,
        created_at=entity.created_at,
    )
