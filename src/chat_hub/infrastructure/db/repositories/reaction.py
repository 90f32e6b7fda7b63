from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from chat_hub.domain.entities.reaction import Reaction
from chat_hub.infrastructure.db.mappers import reaction as mapper
from chat_hub.infrastructure.db.models.reaction import ReactionModel


class ReactionReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_message(self, message_id: UUID) -> list[Reaction]:
        stmt = (
            select(ReactionModel)
            .where(ReactionModel.message_id == message_id)
            .order_by(ReactionModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class ReactionWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, reaction: Reaction) -> Reaction:
        model = mapper.entity_to_model(reaction)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def remove(self, message_id: UUID, user_id: UUID, emoji: str) -> int:
        stmt = delete(ReactionModel).where(
            ReactionModel.message_id == message_id,
            ReactionModel.user_id == user_id,
            ReactionModel.emoji == emoji,
        )
        result = await self._session.execute(stmt)
        return result.rowcount
