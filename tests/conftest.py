"""Shared test fixtures."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Collection
from uuid import UUID

import jwt
import pytest
from starlette.websockets import WebSocketState

from chat_hub.application.dto.principal import Principal
from chat_hub.config import settings
from chat_hub.domain.entities.meeting import Meeting
from chat_hub.domain.entities.membership import Membership
from chat_hub.domain.entities.message import Message
from chat_hub.domain.entities.notification import Notification
from chat_hub.domain.entities.reaction import Reaction
from chat_hub.domain.entities.room import Room
from chat_hub.domain.entities.user import User
from chat_hub.domain.entities.work_session import ActiveEmployee, WorkSession
from chat_hub.domain.value_objects.enums import MessageKind, RoomKind, UserRole


@pytest.fixture
def user_principal() -> Principal:
    return Principal(user_id=uuid.uuid4())


@pytest.fixture
def other_principal() -> Principal:
    return Principal(user_id=uuid.uuid4())


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(user_id=uuid.uuid4(), role=UserRole.ADMIN)


def auth_headers(sub: UUID, role: str = UserRole.EMPLOYEE) -> dict[str, str]:
    token = jwt.encode(
        {"sub": str(sub), "role": role},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    return {"Authorization": f"Bearer {token}"}


def make_user(*, user_id: UUID | None = None, username: str = "alex", is_active: bool = True) -> User:
    return User(
        id=user_id or uuid.uuid4(),
        username=username,
        full_name=username.title(),
        department="Engineering",
        is_active=is_active,
    )


def make_room(
    *,
    room_id: UUID | None = None,
    kind: str = RoomKind.GROUP,
    name: str | None = "team",
    created_by: UUID | None = None,
) -> Room:
    now = datetime.now(timezone.utc)
    return Room(
        id=room_id or uuid.uuid4(),
        name=name,
        kind=kind,
        photo_url=None,
        created_by=created_by,
        private_key=None,
        created_at=now,
        updated_at=now,
    )


def make_message(
    *,
    room_id: UUID | None = None,
    sender_id: UUID | None = None,
    content: str | None = "hello",
) -> Message:
    return Message(
        id=uuid.uuid4(),
        room_id=room_id or uuid.uuid4(),
        sender_id=sender_id or uuid.uuid4(),
        content=content,
        kind=MessageKind.TEXT,
        created_at=datetime.now(timezone.utc),
    )


@dataclass
class FakeUserReader:
    _users: dict[UUID, User] = field(default_factory=dict)

    async def get_by_id(self, user_id: UUID) -> User | None:
        return self._users.get(user_id)


@dataclass
class FakeRoomReader:
    _store: dict[UUID, Room] = field(default_factory=dict)
    _members: list[Membership] = field(default_factory=list)

    async def get_by_id(self, room_id: UUID) -> Room | None:
        return self._store.get(room_id)

    async def get_common(self, name: str) -> Room | None:
        for room in self._store.values():
            if room.kind == RoomKind.GROUP and room.name == name and room.created_by is None:
                return room
        return None

    async def list_for_user(self, user_id: UUID) -> list[Room]:
        room_ids = [m.room_id for m in self._members if m.user_id == user_id]
        return [self._store[rid] for rid in room_ids if rid in self._store]


@dataclass
class FakeRoomWriter:
    _reader: FakeRoomReader

    async def create(self, room: Room) -> Room:
        self._reader._store[room.id] = room
        return room

    async def get_or_create_private(self, room: Room) -> tuple[Room, bool]:
        for existing in self._reader._store.values():
            if existing.private_key == room.private_key:
                return existing, False
        self._reader._store[room.id] = room
        return room, True

    async def update(
        self,
        room_id: UUID,
        *,
        name: str | None,
        photo_url: str | None,
        updated_at: datetime,
    ) -> Room | None:
        room = self._reader._store.get(room_id)
        if room is None:
            return None
        updated = Room(
            id=room.id,
            name=name,
            kind=room.kind,
            photo_url=photo_url,
            created_by=room.created_by,
            private_key=room.private_key,
            created_at=room.created_at,
            updated_at=updated_at,
        )
        self._reader._store[room_id] = updated
        return updated

    async def delete(self, room_id: UUID) -> bool:
        return self._reader._store.pop(room_id, None) is not None


@dataclass
class FakeMembershipReader:
    _members: list[Membership] = field(default_factory=list)

    async def is_member(self, room_id: UUID, user_id: UUID) -> bool:
        return any(m.room_id == room_id and m.user_id == user_id for m in self._members)

    async def list_members(self, room_id: UUID) -> list[Membership]:
        return [m for m in self._members if m.room_id == room_id]


@dataclass
class FakeMembershipWriter:
    _reader: FakeMembershipReader

    async def add(self, membership: Membership) -> bool:
        if await self._reader.is_member(membership.room_id, membership.user_id):
            return False
        self._reader._members.append(membership)
        return True

    async def remove(self, room_id: UUID, user_id: UUID) -> bool:
        before = len(self._reader._members)
        self._reader._members[:] = [
            m for m in self._reader._members
            if not (m.room_id == room_id and m.user_id == user_id)
        ]
        return len(self._reader._members) < before


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def get_by_id(self, message_id: UUID) -> Message | None:
        for m in self._messages:
            if m.id == message_id:
                return m
        return None

    async def list_messages(self, room_id: UUID, *, limit: int = 50) -> list[Message]:
        in_room = [m for m in self._messages if m.room_id == room_id]
        return in_room[-limit:]


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader

    async def create(self, message: Message) -> Message:
        self._reader._messages.append(message)
        return message

    async def update_content(
        self,
        message_id: UUID,
        content: str,
        updated_at: datetime,
    ) -> Message | None:
        for i, m in enumerate(self._reader._messages):
            if m.id == message_id:
                updated = Message(
                    id=m.id,
                    room_id=m.room_id,
                    sender_id=m.sender_id,
                    content=content,
                    kind=m.kind,
                    created_at=m.created_at,
                    attachments=m.attachments,
                    reply_to=m.reply_to,
                    updated_at=updated_at,
                )
                self._reader._messages[i] = updated
                return updated
        return None

    async def delete(self, message_id: UUID) -> bool:
        before = len(self._reader._messages)
        self._reader._messages[:] = [m for m in self._reader._messages if m.id != message_id]
        return len(self._reader._messages) < before


@dataclass
class FakeReactionReader:
    _reactions: list[Reaction] = field(default_factory=list)

    async def list_for_message(self, message_id: UUID) -> list[Reaction]:
        return [r for r in self._reactions if r.message_id == message_id]


@dataclass
class FakeReactionWriter:
    _reader: FakeReactionReader

    async def add(self, reaction: Reaction) -> Reaction:
        self._reader._reactions.append(reaction)
        return reaction

    async def remove(self, message_id: UUID, user_id: UUID, emoji: str) -> int:
        before = len(self._reader._reactions)
        self._reader._reactions[:] = [
            r for r in self._reader._reactions
            if not (r.message_id == message_id and r.user_id == user_id and r.emoji == emoji)
        ]
        return before - len(self._reader._reactions)


@dataclass
class FakeNotificationReader:
    _notifications: list[Notification] = field(default_factory=list)

    async def get_by_id(self, notification_id: UUID) -> Notification | None:
        for n in self._notifications:
            if n.id == notification_id:
                return n
        return None

    async def list_for_user(self, user_id: UUID, *, unread_only: bool = False) -> list[Notification]:
        return [
            n for n in self._notifications
            if n.user_id == user_id and not (unread_only and n.is_read)
        ]


@dataclass
class FakeNotificationWriter:
    _reader: FakeNotificationReader

    async def create(self, notification: Notification) -> Notification:
        self._reader._notifications.append(notification)
        return notification

    async def mark_read(self, notification_id: UUID) -> None:
        for i, n in enumerate(self._reader._notifications):
            if n.id == notification_id:
                self._reader._notifications[i] = Notification(
                    id=n.id,
                    user_id=n.user_id,
                    title=n.title,
                    message=n.message,
                    type=n.type,
                    is_read=True,
                    metadata=n.metadata,
                    created_at=n.created_at,
                )


@dataclass
class FakeWorkSessionReader:
    _sessions: list[WorkSession] = field(default_factory=list)
    _users: dict[UUID, User] = field(default_factory=dict)

    async def get_by_id(self, session_id: UUID) -> WorkSession | None:
        for s in self._sessions:
            if s.id == session_id:
                return s
        return None

    async def get_open_for_user(self, user_id: UUID) -> WorkSession | None:
        for s in self._sessions:
            if s.user_id == user_id and s.is_open:
                return s
        return None

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        started_from: datetime | None = None,
        started_until: datetime | None = None,
    ) -> list[WorkSession]:
        return sorted(
            (
                s for s in self._sessions
                if s.user_id == user_id
                and (started_from is None or s.start_time >= started_from)
                and (started_until is None or s.start_time <= started_until)
            ),
            key=lambda s: s.start_time,
            reverse=True,
        )

    async def list_active(self) -> list[ActiveEmployee]:
        result = []
        for s in sorted(self._sessions, key=lambda s: s.start_time):
            user = self._users.get(s.user_id)
            if s.is_open and user is not None and user.is_active:
                result.append(ActiveEmployee(session=s, user=user))
        return result


def _ended(session: WorkSession, ended_at: datetime, notes: str | None) -> WorkSession:
    return WorkSession(
        id=session.id,
        user_id=session.user_id,
        status=session.status,
        start_time=session.start_time,
        end_time=ended_at,
        duration_seconds=int((ended_at - session.start_time).total_seconds()),
        notes=notes if notes is not None else session.notes,
    )


@dataclass
class FakeWorkSessionWriter:
    _reader: FakeWorkSessionReader

    async def start(self, session: WorkSession) -> WorkSession:
        self._reader._sessions.append(session)
        return session

    async def close_open_for_user(self, user_id: UUID, ended_at: datetime) -> None:
        self._reader._sessions[:] = [
            _ended(s, ended_at, None) if s.user_id == user_id and s.is_open else s
            for s in self._reader._sessions
        ]

    async def end(
        self,
        session_id: UUID,
        ended_at: datetime,
        notes: str | None = None,
    ) -> WorkSession | None:
        for i, s in enumerate(self._reader._sessions):
            if s.id == session_id:
                self._reader._sessions[i] = _ended(s, ended_at, notes)
                return self._reader._sessions[i]
        return None


@dataclass
class FakeMeetingReader:
    _meetings: list[Meeting] = field(default_factory=list)

    async def get_by_id(self, meeting_id: UUID) -> Meeting | None:
        for m in self._meetings:
            if m.id == meeting_id:
                return m
        return None

    async def list_for_user(self, user_id: UUID) -> list[Meeting]:
        return [
            m for m in self._meetings
            if m.scheduled_by == user_id or user_id in m.participant_ids
        ]


@dataclass
class FakeMeetingWriter:
    _reader: FakeMeetingReader

    async def create(self, meeting: Meeting) -> Meeting:
        self._reader._meetings.append(meeting)
        return meeting


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    users: FakeUserReader = field(default_factory=FakeUserReader)
    members: FakeMembershipReader = field(default_factory=FakeMembershipReader)
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    reactions: FakeReactionReader = field(default_factory=FakeReactionReader)
    notifications: FakeNotificationReader = field(default_factory=FakeNotificationReader)
    meetings: FakeMeetingReader = field(default_factory=FakeMeetingReader)
    _committed: bool = False
    _commits: int = 0

    def __post_init__(self) -> None:
        self.rooms = FakeRoomReader(_members=self.members._members)
        self.rooms_w = FakeRoomWriter(self.rooms)
        self.members_w = FakeMembershipWriter(self.members)
        self.messages_w = FakeMessageWriter(self.messages)
        self.reactions_w = FakeReactionWriter(self.reactions)
        self.notifications_w = FakeNotificationWriter(self.notifications)
        self.work_sessions = FakeWorkSessionReader(_users=self.users._users)
        self.work_sessions_w = FakeWorkSessionWriter(self.work_sessions)
        self.meetings_w = FakeMeetingWriter(self.meetings)

    def add_user(self, user: User) -> User:
        self.users._users[user.id] = user
        return user

    def add_room(self, room: Room, *member_ids: UUID) -> Room:
        self.rooms._store[room.id] = room
        for user_id in member_ids:
            self.members._members.append(
                Membership(room_id=room.id, user_id=user_id, joined_at=room.created_at)
            )
        return room

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._committed = True
        self._commits += 1

    async def rollback(self) -> None:
        pass


class FakeConnection:
    """WebSocket double exposing the states the registry looks at."""

    def __init__(self, name: str = "ws", *, fail: bool = False) -> None:
        self.name = name
        self.fail = fail
        self.accepted = False
        self.sent: list[str] = []
        self.client_state = WebSocketState.CONNECTING
        self.application_state = WebSocketState.CONNECTING

    async def accept(self) -> None:
        self.accepted = True
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED

    async def send_text(self, data: str) -> None:
        if self.fail:
            raise RuntimeError(f"{self.name} is gone")
        self.sent.append(data)

    def close(self) -> None:
        self.client_state = WebSocketState.DISCONNECTED

    def __repr__(self) -> str:
        return f"FakeConnection({self.name!r})"


@dataclass
class RecordingBroadcaster:
    events: list[tuple[str, Any]] = field(default_factory=list)
    relayed: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    async def broadcast(self, event_type: str, data: Any) -> None:
        self.events.append((str(event_type), data))

    async def relay(self, raw: str, *, exclude: Collection[Any] = ()) -> None:
        self.relayed.append((raw, tuple(exclude)))

    def types(self) -> list[str]:
        return [t for t, _ in self.events]
