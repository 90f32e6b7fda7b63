from __future__ import annotations

from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from chat_hub.infrastructure.db.repositories.meeting import (
    MeetingReaderRepo,
    MeetingWriterRepo,
)
from chat_hub.infrastructure.db.repositories.membership import (
    MembershipReaderRepo,
    MembershipWriterRepo,
)
from chat_hub.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from chat_hub.infrastructure.db.repositories.notification import (
    NotificationReaderRepo,
    NotificationWriterRepo,
)
from chat_hub.infrastructure.db.repositories.reaction import (
    ReactionReaderRepo,
    ReactionWriterRepo,
)
from chat_hub.infrastructure.db.repositories.room import RoomReaderRepo, RoomWriterRepo
from chat_hub.infrastructure.db.repositories.user import UserReaderRepo
from chat_hub.infrastructure.db.repositories.work_session import (
    WorkSessionReaderRepo,
    WorkSessionWriterRepo,
)


class SqlAlchemyUoW:
    """Concrete Unit-of-Work backed by a single AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.users = UserReaderRepo(session)
        self.rooms = RoomReaderRepo(session)
        self.rooms_w = RoomWriterRepo(session)
        self.members = MembershipReaderRepo(session)
        self.members_w = MembershipWriterRepo(session)
        self.messages = MessageReaderRepo(session)
        self.messages_w = MessageWriterRepo(session)
        self.reactions = ReactionReaderRepo(session)
        self.reactions_w = ReactionWriterRepo(session)
        self.notifications = NotificationReaderRepo(session)
        self.notifications_w = NotificationWriterRepo(session)
        self.work_sessions = WorkSessionReaderRepo(session)
        self.work_sessions_w = WorkSessionWriterRepo(session)
        self.meetings = MeetingReaderRepo(session)
        self.meetings_w = MeetingWriterRepo(session)

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()
