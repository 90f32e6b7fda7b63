from __future__ import annotations

from chat_hub.domain.entities.membership import Membership
from chat_hub.infrastructure.db.models.membership import MembershipModel


def model_to_entity(model: MembershipModel) -> Membership:
    return Membership(
        room_id=model.room_id,
        user_id=model.user_id,
        joined_at=model.joined_at,
    )
