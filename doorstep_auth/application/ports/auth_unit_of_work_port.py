from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, TypeVar

from doorstep_auth.application.ports.refresh_token_store_port import RefreshTokenStorePort
from doorstep_auth.application.ports.role_store_port import RoleStorePort
from doorstep_auth.application.ports.user_store_port import UserStorePort


TAuthResult = TypeVar("TAuthResult")


@dataclass(frozen=True)
class AuthStores:
    users: UserStorePort
    roles: RoleStorePort
    refresh_tokens: RefreshTokenStorePort


class AuthUnitOfWorkPort(Protocol):
    def execute_in_transaction(self, fn: Callable[[AuthStores], TAuthResult]) -> TAuthResult:
        """Run fn against stores bound to one transaction; commit on return, roll back on raise."""
        ...
