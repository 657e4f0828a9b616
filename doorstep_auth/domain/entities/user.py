from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


DEFAULT_ROLE_NAME = "User"


@dataclass(frozen=True)
class Role:
    id: str
    name: str
    description: str


@dataclass(frozen=True)
class UserRole:
    id: str
    user_id: str
    role_id: str
    created_at: datetime


@dataclass(frozen=True)
class User:
    id: str
    email: str
    password_hash: str
    first_name: str
    last_name: str
    phone_number: str | None
    is_email_verified: bool
    is_active: bool
    last_login_at: datetime | None
    created_at: datetime
    updated_at: datetime
    is_deleted: bool = False
    roles: tuple[Role, ...] = field(default_factory=tuple)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def role_names(self) -> list[str]:
        return [role.name for role in self.roles]


class RefreshTokenState(str, Enum):
    ACTIVE = "active"
    ROTATED = "rotated"
    REVOKED = "revoked"
    EXPIRED = "expired"


@dataclass(frozen=True)
class RefreshToken:
    id: str
    user_id: str
    token_hash: str
    expires_at: datetime
    is_revoked: bool
    revoked_at: datetime | None
    revoked_by_ip: str | None
    replaced_by_token_hash: str | None
    created_by_ip: str | None
    created_at: datetime
    updated_at: datetime

    def is_active(self, now: datetime) -> bool:
        return not self.is_revoked and self.expires_at > now

    def state(self, now: datetime) -> RefreshTokenState:
        if self.is_revoked:
            if self.replaced_by_token_hash:
                return RefreshTokenState.ROTATED
            return RefreshTokenState.REVOKED
        if self.expires_at <= now:
            return RefreshTokenState.EXPIRED
        return RefreshTokenState.ACTIVE
