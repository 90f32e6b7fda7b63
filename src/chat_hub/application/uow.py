from __future__ import annotations

from typing import Protocol

from chat_hub.application.repositories.meeting import MeetingReader, MeetingWriter
from chat_hub.application.repositories.membership import (
    MembershipReader,
    MembershipWriter,
)
from chat_hub.application.repositories.message import MessageReader, MessageWriter
from chat_hub.application.repositories.notification import (
    NotificationReader,
    NotificationWriter,
)
from chat_hub.application.repositories.reaction import ReactionReader, ReactionWriter
from chat_hub.application.repositories.room import RoomReader, RoomWriter
from chat_hub.application.repositories.user import UserReader
from chat_hub.application.repositories.work_session import (
    WorkSessionReader,
    WorkSessionWriter,
)


class UnitOfWork(Protocol):
    """The persistence gateway as seen by the services."""

    users: UserReader
    rooms: RoomReader
    rooms_w: RoomWriter
    members: MembershipReader
    members_w: MembershipWriter
    messages: MessageReader
    messages_w: MessageWriter
    reactions: ReactionReader
    reactions_w: ReactionWriter
    notifications: NotificationReader
    notifications_w: NotificationWriter
    work_sessions: WorkSessionReader
    work_sessions_w: WorkSessionWriter
    meetings: MeetingReader
    meetings_w: MeetingWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
