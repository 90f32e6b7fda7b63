from __future__ import annotations

from uuid import UUID

import jwt

from chat_hub.application.dto.principal import Principal
from chat_hub.domain.value_objects.enums import UserRole


class HS256Verifier:
    """Verify session tokens signed with a shared HS256 secret."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    async def verify(self, token: str) -> Principal:
        payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        role_raw = payload.get("role", UserRole.EMPLOYEE)
        role = UserRole(role_raw) if role_raw in UserRole._value2member_map_ else UserRole.EMPLOYEE
        return Principal(user_id=UUID(str(payload["sub"])), role=role)
