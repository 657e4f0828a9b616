from __future__ import annotations

import logging

from doorstep_auth.application.dto.auth import RevokeTokenInput
from doorstep_auth.application.ports.auth_unit_of_work_port import AuthStores, AuthUnitOfWorkPort
from doorstep_auth.application.ports.clock_port import ClockPort
from doorstep_auth.application.ports.token_port import TokenPort


logger = logging.getLogger(__name__)


class RevokeTokenUseCase:
    def __init__(self, *, unit_of_work: AuthUnitOfWorkPort, token_port: TokenPort, clock: ClockPort):
        self._unit_of_work = unit_of_work
        self._token_port = token_port
        self._clock = clock

    def execute(self, command: RevokeTokenInput) -> bool:
        token = command.refresh_token.strip()
        if not token:
            return False

        token_hash = self._token_port.hash_token(token=token)

        def _tx(stores: AuthStores) -> bool:
            now = self._clock.now()
            stored = stores.refresh_tokens.find_valid_by_hash(token_hash=token_hash, now=now)
            if stored is None:
                return False
            revoked = stores.refresh_tokens.revoke(
                token_id=stored.id,
                revoked_at=now,
                revoked_by_ip=command.ip,
            )
            if revoked:
                logger.info("revoke_token: revoked token_id=%s", stored.id)
            return revoked

        return self._unit_of_work.execute_in_transaction(_tx)
