from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from chat_hub.api.v1.schemas.common import CamelRequest


class ScheduleMeetingRequest(CamelRequest):
    title: str = Field(..., min_length=1, max_length=255)
    meeting_link: str = Field(..., min_length=1)
    start_time: datetime
    end_time: datetime | None = None
    description: str | None = None
    participant_ids: list[UUID] = []
