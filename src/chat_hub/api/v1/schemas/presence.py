from __future__ import annotations

from chat_hub.api.v1.schemas.common import CamelRequest


class StartSessionRequest(CamelRequest):
    status: str = "working"
    notes: str | None = None


class EndSessionRequest(CamelRequest):
    notes: str | None = None
