from __future__ import annotations

import logging
from dataclasses import replace

from doorstep_auth.application.dto.auth import AuthResultOutput, LoginUserInput
from doorstep_auth.application.ports.auth_unit_of_work_port import AuthStores, AuthUnitOfWorkPort
from doorstep_auth.application.ports.clock_port import ClockPort
from doorstep_auth.application.ports.password_hasher_port import PasswordHasherPort
from doorstep_auth.application.ports.token_port import TokenPort
from doorstep_auth.domain.exceptions import InvalidCredentialsError, UserInactiveError

from .auth_common import issue_tokens, normalize_email


logger = logging.getLogger(__name__)


class LoginUserUseCase:
    def __init__(
        self,
        *,
        unit_of_work: AuthUnitOfWorkPort,
        password_hasher: PasswordHasherPort,
        token_port: TokenPort,
        clock: ClockPort,
    ):
        self._unit_of_work = unit_of_work
        self._password_hasher = password_hasher
        self._token_port = token_port
        self._clock = clock

    def execute(self, command: LoginUserInput) -> AuthResultOutput:
        email = normalize_email(command.email)

        def _tx(stores: AuthStores) -> AuthResultOutput:
            user = stores.users.find_by_email(email=email)
            if user is None:
                # Unknown e-mails cost one hash, like the verify path.
                self._password_hasher.hash(command.password)
                raise InvalidCredentialsError("Invalid email or password.")

            if not self._password_hasher.verify(command.password, user.password_hash):
                raise InvalidCredentialsError("Invalid email or password.")

            if not user.is_active:
                logger.info("login_user: inactive account user_id=%s", user.id)
                raise UserInactiveError("Account is inactive.")

            now = self._clock.now()
            user = stores.users.update(user=replace(user, last_login_at=now), now=now)

            output, _ = issue_tokens(
                user=user,
                roles=user.role_names,
                refresh_tokens=stores.refresh_tokens,
                token_port=self._token_port,
                now=now,
                ip=command.ip,
            )
            return output

        output = self._unit_of_work.execute_in_transaction(_tx)
        logger.info("login_user: authenticated user_id=%s", output.user.id)
        return output
