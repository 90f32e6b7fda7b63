from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, Response

from chat_hub.api.deps import BroadcasterDep, CurrentPrincipal, UoWDep
from chat_hub.api.v1.schemas.notification import CreateNotificationRequest
from chat_hub.application.dto.payloads import NotificationPayload
from chat_hub.services import notification_service

router = APIRouter(prefix="/api/v1/chat/notifications", tags=["notifications"])


@router.post("", response_model=NotificationPayload, status_code=201)
async def create_notification(
    body: CreateNotificationRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    broadcaster: BroadcasterDep,
) -> NotificationPayload:
    notification = await notification_service.create_notification(
        principal,
        body.user_id,
        body.title,
        body.message,
        body.type,
        uow,
        broadcaster,
        metadata=body.metadata,
    )
    return NotificationPayload.model_validate(notification)


@router.get("", response_model=list[NotificationPayload])
async def list_notifications(
    principal: CurrentPrincipal,
    uow: UoWDep,
    unread_only: bool = Query(False, alias="unreadOnly"),
) -> list[NotificationPayload]:
    notifications = await notification_service.list_notifications(principal, unread_only, uow)
    return [NotificationPayload.model_validate(n) for n in notifications]


@router.post("/{notification_id}/read", status_code=204)
async def mark_read(
    notification_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> Response:
    await notification_service.mark_read(notification_id, principal, uow)
    return Response(status_code=204)
