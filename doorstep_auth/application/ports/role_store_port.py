from __future__ import annotations

from datetime import datetime
from typing import Protocol

from doorstep_auth.domain.entities.user import Role, UserRole


class RoleStorePort(Protocol):
    def find_by_name(self, *, name: str) -> Role | None:
        ...

    def assign_to_user(self, *, user_role_id: str, user_id: str, role_id: str, now: datetime) -> UserRole:
        ...
