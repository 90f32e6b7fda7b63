from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from chat_hub.domain.value_objects.enums import RoomKind


@dataclass(frozen=True, slots=True)
class CreateRoomDTO:
    kind: RoomKind = RoomKind.GROUP
    name: str | None = None
    photo_url: str | None = None
    member_ids: tuple[UUID, ...] = field(default_factory=tuple)
