from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Integer, cast, func, literal, select, update
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.ext.asyncio import AsyncSession

from chat_hub.domain.entities.work_session import ActiveEmployee, WorkSession
from chat_hub.infrastructure.db.mappers import user as user_mapper
from chat_hub.infrastructure.db.mappers import work_session as mapper
from chat_hub.infrastructure.db.models.user import UserModel
from chat_hub.infrastructure.db.models.work_session import WorkSessionModel


class WorkSessionReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, session_id: UUID) -> WorkSession | None:
        result = await self._session.get(WorkSessionModel, session_id)
        return mapper.model_to_entity(result) if result else None

    async def get_open_for_user(self, user_id: UUID) -> WorkSession | None:
        stmt = (
            select(WorkSessionModel)
            .where(
                WorkSessionModel.user_id == user_id,
                WorkSessionModel.end_time.is_(None),
            )
            .order_by(WorkSessionModel.start_time.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        started_from: datetime | None = None,
        started_until: datetime | None = None,
    ) -> list[WorkSession]:
        stmt = select(WorkSessionModel).where(WorkSessionModel.user_id == user_id)
        if started_from is not None:
            stmt = stmt.where(WorkSessionModel.start_time >= started_from)
        if started_until is not None:
            stmt = stmt.where(WorkSessionModel.start_time <= started_until)
        result = await self._session.execute(stmt.order_by(WorkSessionModel.start_time.desc()))
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_active(self) -> list[ActiveEmployee]:
        stmt = (
            select(WorkSessionModel, UserModel)
            .join(UserModel, UserModel.id == WorkSessionModel.user_id)
            .where(
                WorkSessionModel.end_time.is_(None),
                UserModel.is_active.is_(True),
            )
            .order_by(WorkSessionModel.start_time.asc())
        )
        result = await self._session.execute(stmt)
        return [
            ActiveEmployee(
                session=mapper.model_to_entity(session_model),
                user=user_mapper.model_to_entity(user_model),
            )
            for session_model, user_model in result.all()
        ]


class WorkSessionWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def start(self, session: WorkSession) -> WorkSession:
        model = mapper.entity_to_model(session)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def close_open_for_user(self, user_id: UUID, ended_at: datetime) -> None:
        ended = literal(ended_at, TIMESTAMP(timezone=True))
        stmt = (
            update(WorkSessionModel)
            .where(
                WorkSessionModel.user_id == user_id,
                WorkSessionModel.end_time.is_(None),
            )
            .values(
                end_time=ended,
                duration_seconds=cast(
                    func.extract("epoch", ended - WorkSessionModel.start_time), Integer,
                ),
            )
        )
        await self._session.execute(stmt)

    async def end(
        self,
        session_id: UUID,
        ended_at: datetime,
        notes: str | None = None,
    ) -> WorkSession | None:
        model = await self._session.get(WorkSessionModel, session_id)
        if model is None:
            return None
        model.end_time = ended_at
        model.duration_seconds = int((ended_at - model.start_time).total_seconds())
        if notes is not None:
            model.notes = notes
        await self._session.flush()
        return mapper.model_to_entity(model)
