from __future__ import annotations

from datetime import datetime
from typing import Protocol

from doorstep_auth.domain.entities.user import User


class UserStorePort(Protocol):
    def find_by_email(self, *, email: str) -> User | None:
        ...

    def find_by_id_with_roles(self, *, user_id: str) -> User | None:
        ...

    def email_exists(self, *, email: str) -> bool:
        ...

    def add(self, *, user: User, now: datetime) -> User:
        ...

    def update(self, *, user: User, now: datetime) -> User:
        ...
