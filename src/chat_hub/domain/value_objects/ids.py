from __future__ import annotations

from typing import NewType
from uuid import UUID

RoomId = NewType("RoomId", UUID)
MessageId = NewType("MessageId", UUID)
UserId = NewType("UserId", UUID)


def private_room_key(first: UUID, second: UUID) -> str:
    """Order-independent key of a 1:1 room, e.g. ``"<low>:<high>"``."""
    low, high = sorted((str(first), str(second)))
    return f"{low}:{high}"
