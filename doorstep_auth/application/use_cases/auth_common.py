from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from doorstep_auth.application.dto.auth import AuthResultOutput, UserProfileOutput
from doorstep_auth.application.ports.refresh_token_store_port import RefreshTokenStorePort
from doorstep_auth.application.ports.token_port import TokenPort
from doorstep_auth.domain.entities.user import RefreshToken, User


def normalize_email(email: str) -> str:
    return email.strip().lower()


def build_user_profile_output(user: User, roles: list[str]) -> UserProfileOutput:
    return UserProfileOutput(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        phone_number=user.phone_number,
        roles=list(roles),
        created_at=user.created_at,
    )


def issue_tokens(
    *,
    user: User,
    roles: list[str],
    refresh_tokens: RefreshTokenStorePort,
    token_port: TokenPort,
    now: datetime,
    ip: str | None,
) -> tuple[AuthResultOutput, RefreshToken]:
    access_token, access_expires_at = token_port.create_access_token(user=user, roles=roles, now=now)
    refresh_token = token_port.generate_refresh_token()
    refresh_expires_at = token_port.refresh_token_expires_at(now=now)
    stored = refresh_tokens.add(
        token=RefreshToken(
            id=str(uuid4()),
            user_id=user.id,
            token_hash=token_port.hash_token(token=refresh_token),
            expires_at=refresh_expires_at,
            is_revoked=False,
            revoked_at=None,
            revoked_by_ip=None,
            replaced_by_token_hash=None,
            created_by_ip=ip,
            created_at=now,
            updated_at=now,
        ),
        now=now,
    )
    output = AuthResultOutput(
        user=build_user_profile_output(user, roles),
        access_token=access_token,
        refresh_token=refresh_token,
        access_token_expires_at=access_expires_at,
        refresh_token_expires_at=refresh_expires_at,
    )
    return output, stored
