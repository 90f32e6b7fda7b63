from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import Field

from chat_hub.api.v1.schemas.common import CamelRequest


class CreateNotificationRequest(CamelRequest):
    user_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    message: str
    type: str = "info"
    metadata: dict[str, Any] | None = None
