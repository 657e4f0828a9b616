from __future__ import annotations

from datetime import datetime
from typing import Protocol

from doorstep_auth.application.dto.auth import AccessTokenPayload
from doorstep_auth.domain.entities.user import User


class TokenPort(Protocol):
    def create_access_token(self, *, user: User, roles: list[str], now: datetime) -> tuple[str, datetime]:
        ...

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        ...

    def generate_refresh_token(self) -> str:
        ...

    def hash_token(self, *, token: str) -> str:
        ...

    def verify_token_hash(self, *, token: str, token_hash: str) -> bool:
        ...

    def refresh_token_expires_at(self, *, now: datetime) -> datetime:
        ...
