from __future__ import annotations

from doorstep_auth.application.dto.auth import UserProfileOutput
from doorstep_auth.application.ports.auth_unit_of_work_port import AuthStores, AuthUnitOfWorkPort

from .auth_common import build_user_profile_output


class GetUserByIdUseCase:
    def __init__(self, *, unit_of_work: AuthUnitOfWorkPort):
        self._unit_of_work = unit_of_work

    def execute(self, *, user_id: str) -> UserProfileOutput | None:
        def _tx(stores: AuthStores) -> UserProfileOutput | None:
            user = stores.users.find_by_id_with_roles(user_id=user_id)
            if user is None:
                return None
            return build_user_profile_output(user, user.role_names)

        return self._unit_of_work.execute_in_transaction(_tx)
