from __future__ import annotations

import logging
from dataclasses import replace

from doorstep_auth.application.dto.auth import AuthResultOutput, RefreshTokenInput
from doorstep_auth.application.ports.auth_unit_of_work_port import AuthStores, AuthUnitOfWorkPort
from doorstep_auth.application.ports.clock_port import ClockPort
from doorstep_auth.application.ports.token_port import TokenPort
from doorstep_auth.domain.exceptions import InvalidOrExpiredTokenError

from .auth_common import issue_tokens


logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """Rotate a refresh token: revoke the presented one and issue a linked successor.

    The revoke, the successor insert and the back-reference update share one
    transaction. The revoke is a conditional update, so when two requests present
    the same token only one of them rotates it and the other fails as if the
    token were unknown.
    """

    def __init__(self, *, unit_of_work: AuthUnitOfWorkPort, token_port: TokenPort, clock: ClockPort):
        self._unit_of_work = unit_of_work
        self._token_port = token_port
        self._clock = clock

    def execute(self, command: RefreshTokenInput) -> AuthResultOutput:
        token = command.refresh_token.strip()
        if not token:
            raise InvalidOrExpiredTokenError("Invalid or expired refresh token.")

        token_hash = self._token_port.hash_token(token=token)

        def _tx(stores: AuthStores) -> AuthResultOutput | None:
            now = self._clock.now()
            stored = stores.refresh_tokens.find_valid_by_hash(token_hash=token_hash, now=now)
            if stored is None:
                raise InvalidOrExpiredTokenError("Invalid or expired refresh token.")

            if not stores.refresh_tokens.revoke(
                token_id=stored.id,
                revoked_at=now,
                revoked_by_ip=command.ip,
            ):
                logger.warning("refresh_token: lost rotation race token_id=%s", stored.id)
                raise InvalidOrExpiredTokenError("Invalid or expired refresh token.")

            user = stores.users.find_by_id_with_roles(user_id=stored.user_id)
            if user is None or not user.is_active:
                # Revoke is committed; the error is raised after the transaction.
                logger.info("refresh_token: owner unavailable, token_id=%s revoked", stored.id)
                return None

            output, successor = issue_tokens(
                user=user,
                roles=user.role_names,
                refresh_tokens=stores.refresh_tokens,
                token_port=self._token_port,
                now=now,
                ip=command.ip,
            )
            stores.refresh_tokens.update(
                token=replace(
                    stored,
                    is_revoked=True,
                    revoked_at=now,
                    revoked_by_ip=command.ip,
                    replaced_by_token_hash=successor.token_hash,
                ),
                now=now,
            )
            logger.info("refresh_token: rotated token_id=%s -> token_id=%s", stored.id, successor.id)
            return output

        output = self._unit_of_work.execute_in_transaction(_tx)
        if output is None:
            raise InvalidOrExpiredTokenError("Invalid or expired refresh token.")
        return output
