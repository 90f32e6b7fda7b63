from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from chat_hub.domain.entities.work_session import ActiveEmployee, WorkSession


class WorkSessionReader(Protocol):
    async def get_by_id(self, session_id: UUID) -> WorkSession | None: ...

    async def get_open_for_user(self, user_id: UUID) -> WorkSession | None: ...

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        started_from: datetime | None = None,
        started_until: datetime | None = None,
    ) -> list[WorkSession]:
        """Sessions of one user, newest first, optionally bounded by start time."""
        ...

    async def list_active(self) -> list[ActiveEmployee]:
        """Open sessions of active users, ordered by start time."""
        ...


class WorkSessionWriter(Protocol):
    async def start(self, session: WorkSession) -> WorkSession: ...

    async def close_open_for_user(self, user_id: UUID, ended_at: datetime) -> None: ...

    async def end(
        self,
        session_id: UUID,
        ended_at: datetime,
        notes: str | None = None,
    ) -> WorkSession | None: ...
