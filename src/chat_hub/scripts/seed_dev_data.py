"""Seed development data: creates the schema, a few employees and their rooms."""
from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timezone

from chat_hub.application.dto.principal import Principal
from chat_hub.config import settings
from chat_hub.domain.entities.message import Message
from chat_hub.domain.entities.work_session import WorkSession
from chat_hub.domain.value_objects.enums import MessageKind, UserRole
from chat_hub.infrastructure.db.base import Base
from chat_hub.infrastructure.db.models import UserModel
from chat_hub.infrastructure.db.session import AsyncSessionLocal, engine
from chat_hub.infrastructure.db.uow import SqlAlchemyUoW
from chat_hub.logging_config import configure_logging
from chat_hub.services import room_service

logger = logging.getLogger(__name__)

EMPLOYEES = [
    ("admin", "Dana Admin", "HR", UserRole.ADMIN),
    ("alex", "Alex Morgan", "Engineering", UserRole.EMPLOYEE),
    ("sam", "Sam Lee", "Engineering", UserRole.EMPLOYEE),
    ("riley", "Riley Chen", "Sales", UserRole.EMPLOYEE),
]


async def seed() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        now = datetime.now(timezone.utc)

        principals: list[Principal] = []
        for username, full_name, department, role in EMPLOYEES:
            user = UserModel(
                id=uuid.uuid4(),
                username=username,
                full_name=full_name,
                department=department,
                is_active=True,
            )
            session.add(user)
            principals.append(Principal(user_id=user.id, role=role))
        await session.flush()

        for principal in principals:
            await room_service.ensure_in_common_room(principal, settings.COMMON_ROOM_NAME, uow)

        alex, sam = principals[1], principals[2]
        room = await room_service.get_or_create_private_room(alex, sam.user_id, uow)
        for sender, content in (
            (alex, "Morning! Got a minute for the release checklist?"),
            (sam, "Sure, call me in five."),
        ):
            await uow.messages_w.create(
                Message(
                    id=uuid.uuid4(),
                    room_id=room.id,
                    sender_id=sender.user_id,
                    content=content,
                    kind=MessageKind.TEXT,
                    created_at=now,
                )
            )

        for principal in principals[1:]:
            await uow.work_sessions_w.start(
                WorkSession(
                    id=uuid.uuid4(),
                    user_id=principal.user_id,
                    status="working",
                    start_time=now,
                )
            )

        await uow.commit()
        for (username, *_), principal in zip(EMPLOYEES, principals):
            logger.info("Seeded %s (%s) id=%s", username, principal.role, principal.user_id)


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
