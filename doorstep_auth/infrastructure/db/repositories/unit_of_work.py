from __future__ import annotations

from typing import Callable

from doorstep_auth.application.ports.auth_unit_of_work_port import (
    AuthStores,
    AuthUnitOfWorkPort,
    TAuthResult,
)
from doorstep_auth.infrastructure.db.repositories.refresh_token_repository import SqlRefreshTokenRepository
from doorstep_auth.infrastructure.db.repositories.role_repository import SqlRoleRepository
from doorstep_auth.infrastructure.db.repositories.user_repository import SqlUserRepository


class SqlAuthUnitOfWork(AuthUnitOfWorkPort):
    def __init__(self, engine):
        self._engine = engine

    def execute_in_transaction(self, fn: Callable[[AuthStores], TAuthResult]) -> TAuthResult:
        with self._engine.begin() as conn:
            stores = AuthStores(
                users=SqlUserRepository(conn),
                roles=SqlRoleRepository(conn),
                refresh_tokens=SqlRefreshTokenRepository(conn),
            )
            return fn(stores)
