from __future__ import annotations

import logging

from doorstep_auth.application.ports.auth_unit_of_work_port import AuthStores, AuthUnitOfWorkPort
from doorstep_auth.application.ports.clock_port import ClockPort


logger = logging.getLogger(__name__)


class RevokeAllUserTokensUseCase:
    def __init__(self, *, unit_of_work: AuthUnitOfWorkPort, clock: ClockPort):
        self._unit_of_work = unit_of_work
        self._clock = clock

    def execute(self, *, user_id: str, ip: str | None = None) -> int:
        def _tx(stores: AuthStores) -> int:
            return stores.refresh_tokens.revoke_all_for_user(
                user_id=user_id,
                revoked_at=self._clock.now(),
                revoked_by_ip=ip,
            )

        count = self._unit_of_work.execute_in_transaction(_tx)
        logger.info("revoke_all_user_tokens: user_id=%s revoked=%s", user_id, count)
        return count
