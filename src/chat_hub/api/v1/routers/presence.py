from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Query

from chat_hub.api.deps import CurrentPrincipal, UoWDep
from chat_hub.api.v1.schemas.presence import EndSessionRequest, StartSessionRequest
from chat_hub.application.dto.payloads import WorkSessionPayload
from chat_hub.services import presence_service

router = APIRouter(prefix="/api/v1/chat/presence", tags=["presence"])


@router.post("/sessions", response_model=WorkSessionPayload, status_code=201)
async def start_session(
    body: StartSessionRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> WorkSessionPayload:
    session = await presence_service.start_session(principal, body.status, body.notes, uow)
    return WorkSessionPayload.model_validate(session)


@router.post("/sessions/{session_id}/end", response_model=WorkSessionPayload)
async def end_session(
    session_id: UUID,
    body: EndSessionRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> WorkSessionPayload:
    session = await presence_service.end_session(session_id, principal, body.notes, uow)
    return WorkSessionPayload.model_validate(session)


@router.get("/sessions", response_model=list[WorkSessionPayload])
async def list_sessions(
    principal: CurrentPrincipal,
    uow: UoWDep,
    start_date: datetime | None = Query(None, alias="startDate"),
    end_date: datetime | None = Query(None, alias="endDate"),
) -> list[WorkSessionPayload]:
    sessions = await presence_service.list_sessions(
        principal, uow, started_from=start_date, started_until=end_date,
    )
    return [WorkSessionPayload.model_validate(s) for s in sessions]


@router.get("/sessions/current", response_model=WorkSessionPayload | None)
async def current_session(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> WorkSessionPayload | None:
    session = await presence_service.current_session(principal, uow)
    return WorkSessionPayload.model_validate(session) if session else None


@router.get("/active")
async def active_employees(principal: CurrentPrincipal, uow: UoWDep) -> list[dict[str, Any]]:
    return await presence_service.active_snapshot(uow)
