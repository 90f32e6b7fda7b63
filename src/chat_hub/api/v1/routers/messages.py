from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, Response

from chat_hub.api.deps import BroadcasterDep, CurrentPrincipal, UoWDep
from chat_hub.api.v1.schemas.message import (
    EditMessageRequest,
    ReactionRequest,
    SendMessageRequest,
)
from chat_hub.application.dto.message import SendMessageDTO
from chat_hub.application.dto.payloads import MessagePayload, ReactionPayload
from chat_hub.config import settings
from chat_hub.domain.entities.message import Attachment
from chat_hub.services import message_service, reaction_service

router = APIRouter(prefix="/api/v1/chat", tags=["messages"])


@router.get("/rooms/{room_id}/messages", response_model=list[MessagePayload])
async def list_messages(
    room_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
    limit: int = Query(settings.MESSAGE_PAGE_LIMIT, ge=1, le=settings.MESSAGE_PAGE_MAX),
) -> list[MessagePayload]:
    messages = await message_service.list_messages(room_id, principal, limit, uow)
    return [MessagePayload.model_validate(m) for m in messages]


@router.post("/messages", response_model=MessagePayload, status_code=201)
async def send_message(
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    broadcaster: BroadcasterDep,
) -> MessagePayload:
    dto = SendMessageDTO(
        room_id=body.room_id,
        content=body.content,
        kind=body.kind,
        attachments=tuple(
            Attachment(name=a.name, type=a.type, url=a.url, size=a.size)
            for a in body.attachments
        ),
        reply_to=body.reply_to,
    )
    msg = await message_service.send_message(principal, dto, uow, broadcaster)
    return MessagePayload.model_validate(msg)


@router.put("/messages/{message_id}", response_model=MessagePayload)
async def edit_message(
    message_id: UUID,
    body: EditMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    broadcaster: BroadcasterDep,
) -> MessagePayload:
    msg = await message_service.edit_message(
        message_id, principal, body.content, uow, broadcaster,
    )
    return MessagePayload.model_validate(msg)


@router.delete("/messages/{message_id}", status_code=204)
async def delete_message(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
    broadcaster: BroadcasterDep,
) -> Response:
    await message_service.delete_message(message_id, principal, uow, broadcaster)
    return Response(status_code=204)


@router.get("/messages/{message_id}/reactions", response_model=list[ReactionPayload])
async def list_reactions(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[ReactionPayload]:
    reactions = await reaction_service.list_reactions(message_id, principal, uow)
    return [ReactionPayload.model_validate(r) for r in reactions]


@router.post("/reactions", response_model=ReactionPayload, status_code=201)
async def add_reaction(
    body: ReactionRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    broadcaster: BroadcasterDep,
) -> ReactionPayload:
    reaction = await reaction_service.add_reaction(
        body.message_id, principal, body.emoji, uow, broadcaster,
    )
    return ReactionPayload.model_validate(reaction)


@router.delete("/reactions")
async def remove_reaction(
    principal: CurrentPrincipal,
    uow: UoWDep,
    broadcaster: BroadcasterDep,
    message_id: UUID = Query(..., alias="messageId"),
    emoji: str = Query(...),
) -> dict[str, int]:
    removed = await reaction_service.remove_reaction(
        message_id, principal, emoji, uow, broadcaster,
    )
    return {"removed": removed}
