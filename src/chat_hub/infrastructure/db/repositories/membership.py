from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from chat_hub.domain.entities.membership import Membership
from chat_hub.infrastructure.db.mappers import membership as mapper
from chat_hub.infrastructure.db.models.membership import MembershipModel


class MembershipReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def is_member(self, room_id: UUID, user_id: UUID) -> bool:
        stmt = (
            select(MembershipModel.id)
            .where(
                MembershipModel.room_id == room_id,
                MembershipModel.user_id == user_id,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_members(self, room_id: UUID) -> list[Membership]:
        stmt = (
            select(MembershipModel)
            .where(MembershipModel.room_id == room_id)
            .order_by(MembershipModel.joined_at.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MembershipWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, membership: Membership) -> bool:
        stmt = (
            pg_insert(MembershipModel)
            .values(
                room_id=membership.room_id,
                user_id=membership.user_id,
                joined_at=membership.joined_at,
            )
            .on_conflict_do_nothing(constraint="uq_chat_room_member")
            .returning(MembershipModel.id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def remove(self, room_id: UUID, user_id: UUID) -> bool:
        stmt = delete(MembershipModel).where(
            MembershipModel.room_id == room_id,
            MembershipModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0
