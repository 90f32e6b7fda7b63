from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from chat_hub.domain.entities.message import Message
from chat_hub.infrastructure.db.mappers import message as mapper
from chat_hub.infrastructure.db.models.message import MessageModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, message_id: UUID) -> Message | None:
        result = await self._session.get(MessageModel, message_id)
        return mapper.model_to_entity(result) if result else None

    async def list_messages(self, room_id: UUID, *, limit: int = 50) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(MessageModel.room_id == room_id)
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        latest = [mapper.model_to_entity(m) for m in result.scalars().all()]
        latest.reverse()
        return latest


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, message: Message) -> Message:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def update_content(
        self,
        message_id: UUID,
        content: str,
        updated_at: datetime,
    ) -> Message | None:
        stmt = (
            update(MessageModel)
            .where(MessageModel.id == message_id)
            .values(content=content, updated_at=updated_at)
            .returning(MessageModel)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def delete(self, message_id: UUID) -> bool:
        stmt = delete(MessageModel).where(MessageModel.id == message_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0
