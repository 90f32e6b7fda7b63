from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class User:
    """Directory entry owned by the HR side; read-only for the chat hub."""

    id: UUID
    username: str
    full_name: str
    department: str | None
    is_active: bool
