from __future__ import annotations

from collections import defaultdict
from uuid import UUID

from sqlalchemy import insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from chat_hub.domain.entities.meeting import Meeting
from chat_hub.infrastructure.db.mappers import meeting as mapper
from chat_hub.infrastructure.db.models.meeting import MeetingModel, meeting_participants


class MeetingReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, meeting_id: UUID) -> Meeting | None:
        model = await self._session.get(MeetingModel, meeting_id)
        if model is None:
            return None
        rows = await self._session.execute(
            select(meeting_participants.c.user_id).where(
                meeting_participants.c.meeting_id == meeting_id
            )
        )
        return mapper.model_to_entity(model, tuple(rows.scalars().all()))

    async def list_for_user(self, user_id: UUID) -> list[Meeting]:
        stmt = (
            select(MeetingModel)
            .outerjoin(
                meeting_participants,
                meeting_participants.c.meeting_id == MeetingModel.id,
            )
            .where(
                or_(
                    MeetingModel.scheduled_by == user_id,
                    meeting_participants.c.user_id == user_id,
                )
            )
            .distinct()
            .order_by(MeetingModel.start_time.asc())
        )
        result = await self._session.execute(stmt)
        models = list(result.scalars().all())
        if not models:
            return []

        rows = await self._session.execute(
            select(meeting_participants.c.meeting_id, meeting_participants.c.user_id).where(
                meeting_participants.c.meeting_id.in_([m.id for m in models])
            )
        )
        participants: dict[UUID, list[UUID]] = defaultdict(list)
        for meeting_id, participant_id in rows.all():
            participants[meeting_id].append(participant_id)

        return [mapper.model_to_entity(m, tuple(participants[m.id])) for m in models]


class MeetingWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, meeting: Meeting) -> Meeting:
        model = mapper.entity_to_model(meeting)
        self._session.add(model)
        await self._session.flush()
        if meeting.participant_ids:
            await self._session.execute(
                insert(meeting_participants),
                [{"meeting_id": model.id, "user_id": pid} for pid in meeting.participant_ids],
            )
        return mapper.model_to_entity(model, meeting.participant_ids)
