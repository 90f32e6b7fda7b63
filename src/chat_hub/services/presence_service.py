from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from chat_hub.application.dto.payloads import ActiveEmployeePayload
from chat_hub.application.dto.principal import Principal
from chat_hub.application.exceptions import ConflictError, ForbiddenError, NotFoundError
from chat_hub.application.uow import UnitOfWork
from chat_hub.domain.entities.work_session import WorkSession


async def start_session(
    principal: Principal,
    status: str,
    notes: str | None,
    uow: UnitOfWork,
) -> WorkSession:
    """Open a work session; any session the user still has open is closed first."""
    now = datetime.now(timezone.utc)
    await uow.work_sessions_w.close_open_for_user(principal.user_id, now)
    session = await uow.work_sessions_w.start(
        WorkSession(
            id=uuid.uuid4(),
            user_id=principal.user_id,
            status=status,
            start_time=now,
            notes=notes,
        )
    )
    await uow.commit()
    return session


async def end_session(
    session_id: uuid.UUID,
    principal: Principal,
    notes: str | None,
    uow: UnitOfWork,
) -> WorkSession:
    session = await uow.work_sessions.get_by_id(session_id)
    if session is None:
        raise NotFoundError("Work session not found")
    if session.user_id != principal.user_id and not principal.is_admin:
        raise ForbiddenError("Not your work session")
    if not session.is_open:
        raise ConflictError("Work session already ended")

    ended = await uow.work_sessions_w.end(session_id, datetime.now(timezone.utc), notes)
    if ended is None:
        raise NotFoundError("Work session not found")
    await uow.commit()
    return ended


async def current_session(principal: Principal, uow: UnitOfWork) -> WorkSession | None:
    return await uow.work_sessions.get_open_for_user(principal.user_id)


async def list_sessions(
    principal: Principal,
    uow: UnitOfWork,
    *,
    started_from: datetime | None = None,
    started_until: datetime | None = None,
) -> list[WorkSession]:
    return await uow.work_sessions.list_for_user(
        principal.user_id,
        started_from=started_from,
        started_until=started_until,
    )


async def active_snapshot(uow: UnitOfWork) -> list[dict[str, Any]]:
    """Full presence snapshot: every open session of an active user."""
    active = await uow.work_sessions.list_active()
    return [ActiveEmployeePayload.from_entity(a).to_wire() for a in active]
