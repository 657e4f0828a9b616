from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, HTTPException, Request

from doorstep_auth.application.dto.auth import AccessTokenPayload
from doorstep_auth.application.use_cases.get_user_by_id import GetUserByIdUseCase
from doorstep_auth.application.use_cases.login_user import LoginUserUseCase
from doorstep_auth.application.use_cases.refresh_token import RefreshTokenUseCase
from doorstep_auth.application.use_cases.register_user import RegisterUserUseCase
from doorstep_auth.application.use_cases.revoke_all_user_tokens import RevokeAllUserTokensUseCase
from doorstep_auth.application.use_cases.revoke_token import RevokeTokenUseCase
from doorstep_auth.domain.exceptions import ConfigurationError, InvalidOrExpiredTokenError
from doorstep_auth.infrastructure.clock import SystemClock
from doorstep_auth.infrastructure.db.engine import get_engine
from doorstep_auth.infrastructure.db.repositories.unit_of_work import SqlAuthUnitOfWork
from doorstep_auth.infrastructure.security.password_hasher import PasswordHasher
from doorstep_auth.infrastructure.security.token_service import JwtTokenService
from doorstep_auth.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.database_url:
        raise HTTPException(status_code=500, detail="DATABASE_URL is required.")
    return get_engine(settings.database_url)


def _get_unit_of_work() -> SqlAuthUnitOfWork:
    return SqlAuthUnitOfWork(_get_db_engine())


@lru_cache(maxsize=1)
def _get_password_hasher() -> PasswordHasher:
    settings = get_settings()
    return PasswordHasher(
        scheme=settings.password_hash_scheme,
        rounds=settings.password_hash_rounds,
    )


@lru_cache(maxsize=1)
def _get_token_service() -> JwtTokenService:
    return JwtTokenService(get_settings().jwt)


@lru_cache(maxsize=1)
def _get_clock() -> SystemClock:
    return SystemClock()


def get_token_service() -> JwtTokenService:
    try:
        return _get_token_service()
    except ConfigurationError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def get_register_user_use_case(
    token_service: JwtTokenService = Depends(get_token_service),
) -> RegisterUserUseCase:
    return RegisterUserUseCase(
        unit_of_work=_get_unit_of_work(),
        password_hasher=_get_password_hasher(),
        token_port=token_service,
        clock=_get_clock(),
    )


def get_login_user_use_case(
    token_service: JwtTokenService = Depends(get_token_service),
) -> LoginUserUseCase:
    return LoginUserUseCase(
        unit_of_work=_get_unit_of_work(),
        password_hasher=_get_password_hasher(),
        token_port=token_service,
        clock=_get_clock(),
    )


def get_refresh_token_use_case(
    token_service: JwtTokenService = Depends(get_token_service),
) -> RefreshTokenUseCase:
    return RefreshTokenUseCase(
        unit_of_work=_get_unit_of_work(),
        token_port=token_service,
        clock=_get_clock(),
    )


def get_revoke_token_use_case(
    token_service: JwtTokenService = Depends(get_token_service),
) -> RevokeTokenUseCase:
    return RevokeTokenUseCase(
        unit_of_work=_get_unit_of_work(),
        token_port=token_service,
        clock=_get_clock(),
    )


def get_revoke_all_user_tokens_use_case() -> RevokeAllUserTokensUseCase:
    return RevokeAllUserTokensUseCase(unit_of_work=_get_unit_of_work(), clock=_get_clock())


def get_get_user_by_id_use_case() -> GetUserByIdUseCase:
    return GetUserByIdUseCase(unit_of_work=_get_unit_of_work())


def get_client_ip(
    request: Request,
    x_forwarded_for: str | None = Header(default=None),
) -> str:
    if x_forwarded_for:
        first = x_forwarded_for.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_current_token_payload(
    authorization: str | None = Header(default=None),
    token_service: JwtTokenService = Depends(get_token_service),
) -> AccessTokenPayload:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")

    try:
        return token_service.decode_access_token(token=token)
    except InvalidOrExpiredTokenError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
