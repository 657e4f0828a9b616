from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserProfileOutput:
    id: str
    email: str
    first_name: str
    last_name: str
    phone_number: str | None
    roles: list[str]
    created_at: datetime


@dataclass(frozen=True)
class RegisterUserInput:
    email: str
    password: str
    first_name: str
    last_name: str
    phone_number: str | None = None
    ip: str | None = None


@dataclass(frozen=True)
class LoginUserInput:
    email: str
    password: str
    ip: str | None = None


@dataclass(frozen=True)
class RefreshTokenInput:
    refresh_token: str
    ip: str | None = None


@dataclass(frozen=True)
class RevokeTokenInput:
    refresh_token: str
    ip: str | None = None


@dataclass(frozen=True)
class AuthResultOutput:
    user: UserProfileOutput
    access_token: str
    refresh_token: str
    access_token_expires_at: datetime
    refresh_token_expires_at: datetime


@dataclass(frozen=True)
class AccessTokenPayload:
    user_id: str
    email: str
    name: str
    roles: list[str]
    token_id: str
