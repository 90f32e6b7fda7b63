from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from chat_hub.domain.entities.notification import Notification
from chat_hub.infrastructure.db.mappers import notification as mapper
from chat_hub.infrastructure.db.models.notification import NotificationModel


class NotificationReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, notification_id: UUID) -> Notification | None:
        result = await self._session.get(NotificationModel, notification_id)
        return mapper.model_to_entity(result) if result else None

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        unread_only: bool = False,
    ) -> list[Notification]:
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.is_read.is_(False))
        stmt = stmt.order_by(NotificationModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class NotificationWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, notification: Notification) -> Notification:
        model = mapper.entity_to_model(notification)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def mark_read(self, notification_id: UUID) -> None:
        stmt = (
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .values(is_read=True)
        )
        await self._session.execute(stmt)
