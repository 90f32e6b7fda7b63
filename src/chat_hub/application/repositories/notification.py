from __future__ import annotations

from typing import Protocol
from uuid import UUID

from chat_hub.domain.entities.notification import Notification


class NotificationReader(Protocol):
    async def get_by_id(self, notification_id: UUID) -> Notification | None: ...

    async def list_for_user(
        self,
        user_id: UUID,
        *,
        unread_only: bool = False,
    ) -> list[Notification]: ...


class NotificationWriter(Protocol):
    async def create(self, notification: Notification) -> Notification: ...

    async def mark_read(self, notification_id: UUID) -> None: ...
