from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from chat_hub.domain.value_objects.enums import UserRole


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller identity extracted from the session token."""

    user_id: UUID
    role: UserRole = UserRole.EMPLOYEE

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.SUB_ADMIN)
