from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from chat_hub.application.dto.payloads import NotificationPayload
from chat_hub.application.dto.principal import Principal
from chat_hub.application.exceptions import ForbiddenError, NotFoundError
from chat_hub.application.ports.broadcaster import Broadcaster
from chat_hub.application.uow import UnitOfWork
from chat_hub.domain.entities.notification import Notification
from chat_hub.domain.value_objects.enums import EventType


async def add_notification(
    user_id: uuid.UUID,
    title: str,
    message: str,
    type_: str,
    uow: UnitOfWork,
    metadata: dict[str, Any] | None = None,
) -> Notification:
    """Stage a notification in the current unit of work (no commit)."""
    notification = Notification(
        id=uuid.uuid4(),
        user_id=user_id,
        title=title,
        message=message,
        type=type_,
        is_read=False,
        metadata=metadata,
        created_at=datetime.now(timezone.utc),
    )
    return await uow.notifications_w.create(notification)


async def create_notification(
    principal: Principal,
    user_id: uuid.UUID,
    title: str,
    message: str,
    type_: str,
    uow: UnitOfWork,
    broadcaster: Broadcaster,
    metadata: dict[str, Any] | None = None,
) -> Notification:
    if user_id != principal.user_id and not principal.is_admin:
        raise ForbiddenError("Cannot notify other users")
    if await uow.users.get_by_id(user_id) is None:
        raise NotFoundError("User not found")

    notification = await add_notification(user_id, title, message, type_, uow, metadata)
    await uow.commit()

    await broadcaster.broadcast(
        EventType.NEW_NOTIFICATION,
        NotificationPayload.model_validate(notification).to_wire(),
    )
    return notification


async def list_notifications(
    principal: Principal,
    unread_only: bool,
    uow: UnitOfWork,
) -> list[Notification]:
    return await uow.notifications.list_for_user(
        principal.user_id, unread_only=unread_only,
    )


async def mark_read(
    notification_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> None:
    notification = await uow.notifications.get_by_id(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.user_id != principal.user_id:
        raise ForbiddenError("Not your notification")
    if notification.is_read:
        return

    await uow.notifications_w.mark_read(notification_id)
    await uow.commit()
