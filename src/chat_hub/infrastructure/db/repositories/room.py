from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from chat_hub.domain.entities.room import Room
from chat_hub.domain.value_objects.enums import RoomKind
from chat_hub.infrastructure.db.mappers import room as mapper
from chat_hub.infrastructure.db.models.membership import MembershipModel
from chat_hub.infrastructure.db.models.room import RoomModel


class RoomReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, room_id: UUID) -> Room | None:
        result = await self._session.get(RoomModel, room_id)
        return mapper.model_to_entity(result) if result else None

    async def get_common(self, name: str) -> Room | None:
        stmt = (
            select(RoomModel)
            .where(
                RoomModel.kind == RoomKind.GROUP,
                RoomModel.name == name,
                RoomModel.created_by.is_(None),
            )
            .order_by(RoomModel.created_at.asc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def get_private(self, private_key: str) -> Room | None:
        stmt = select(RoomModel).where(RoomModel.private_key == private_key)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(self, user_id: UUID) -> list[Room]:
        stmt = (
            select(RoomModel)
            .join(MembershipModel, MembershipModel.room_id == RoomModel.id)
            .where(MembershipModel.user_id == user_id)
            .order_by(RoomModel.updated_at.desc(), RoomModel.id)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class RoomWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, room: Room) -> Room:
        model = mapper.entity_to_model(room)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def get_or_create_private(self, room: Room) -> tuple[Room, bool]:
        """Insert idempotently on ``private_key``. Returns (room, created_flag)."""
        stmt = (
            pg_insert(RoomModel)
            .values(
                id=room.id,
                name=room.name,
                kind=room.kind,
                photo_url=room.photo_url,
                created_by=room.created_by,
                private_key=room.private_key,
                created_at=room.created_at,
                updated_at=room.updated_at,
            )
            .on_conflict_do_nothing(index_elements=[RoomModel.private_key])
            .returning(RoomModel)
        )
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()
        if row is not None:
            return mapper.model_to_entity(row), True

        # Lost the race or the pair already has a room
        assert room.private_key is not None
        existing = await RoomReaderRepo(self._session).get_private(room.private_key)
        assert existing is not None
        return existing, False

    async def update(
        self,
        room_id: UUID,
        *,
        name: str | None,
        photo_url: str | None,
        updated_at: datetime,
    ) -> Room | None:
        stmt = (
            update(RoomModel)
            .where(RoomModel.id == room_id)
            .values(name=name, photo_url=photo_url, updated_at=updated_at)
            .returning(RoomModel)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def delete(self, room_id: UUID) -> bool:
        result = await self._session.execute(delete(RoomModel).where(RoomModel.id == room_id))
        return result.rowcount > 0
