from __future__ import annotations

import logging
from uuid import uuid4

from doorstep_auth.application.dto.auth import AuthResultOutput, RegisterUserInput
from doorstep_auth.application.ports.auth_unit_of_work_port import AuthStores, AuthUnitOfWorkPort
from doorstep_auth.application.ports.clock_port import ClockPort
from doorstep_auth.application.ports.password_hasher_port import PasswordHasherPort
from doorstep_auth.application.ports.token_port import TokenPort
from doorstep_auth.domain.entities.user import DEFAULT_ROLE_NAME, User
from doorstep_auth.domain.exceptions import ConfigurationError, EmailAlreadyExistsError

from .auth_common import issue_tokens, normalize_email


logger = logging.getLogger(__name__)


class RegisterUserUseCase:
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

    def execute(self, command: RegisterUserInput) -> AuthResultOutput:
        email = normalize_email(command.email)
        first_name = command.first_name.strip()
        last_name = command.last_name.strip()
        phone_number = command.phone_number.strip() if command.phone_number else None

        if not email:
            raise ValueError("email is required.")
        if not first_name:
            raise ValueError("first_name is required.")
        if not last_name:
            raise ValueError("last_name is required.")
        if len(command.password) < 8:
            raise ValueError("password must have at least 8 characters.")

        password_hash = self._password_hasher.hash(command.password)

        def _tx(stores: AuthStores) -> AuthResultOutput:
            if stores.users.email_exists(email=email):
                raise EmailAlreadyExistsError("Email already registered.")

            now = self._clock.now()
            user = stores.users.add(
                user=User(
                    id=str(uuid4()),
                    email=email,
                    password_hash=password_hash,
                    first_name=first_name,
                    last_name=last_name,
                    phone_number=phone_number,
                    is_email_verified=False,
                    is_active=True,
                    last_login_at=None,
                    created_at=now,
                    updated_at=now,
                ),
                now=now,
            )

            role = stores.roles.find_by_name(name=DEFAULT_ROLE_NAME)
            if role is None:
                logger.error("register_user: default role %r is not seeded", DEFAULT_ROLE_NAME)
                raise ConfigurationError(f"Default role '{DEFAULT_ROLE_NAME}' is not configured.")
            stores.roles.assign_to_user(
                user_role_id=str(uuid4()),
                user_id=user.id,
                role_id=role.id,
                now=now,
            )

            output, _ = issue_tokens(
                user=user,
                roles=[role.name],
                refresh_tokens=stores.refresh_tokens,
                token_port=self._token_port,
                now=now,
                ip=command.ip,
            )
            return output

        output = self._unit_of_work.execute_in_transaction(_tx)
        logger.info("register_user: created user_id=%s", output.user.id)
        return output
