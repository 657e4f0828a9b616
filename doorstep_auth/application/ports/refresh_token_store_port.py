from __future__ import annotations

from datetime import datetime
from typing import Protocol

from doorstep_auth.domain.entities.user import RefreshToken


class RefreshTokenStorePort(Protocol):
    def find_valid_by_hash(self, *, token_hash: str, now: datetime) -> RefreshToken | None:
        ...

    def add(self, *, token: RefreshToken, now: datetime) -> RefreshToken:
        ...

    def update(self, *, token: RefreshToken, now: datetime) -> RefreshToken:
        ...

    def revoke(
        self,
        *,
        token_id: str,
        revoked_at: datetime,
        revoked_by_ip: str | None,
    ) -> bool:
        """Revoke the token only if it is still unrevoked; report whether this call did it."""
        ...

    def revoke_all_for_user(
        self,
        *,
        user_id: str,
        revoked_at: datetime,
        revoked_by_ip: str | None,
    ) -> int:
        ...
