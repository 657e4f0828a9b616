from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from doorstep_auth.api.deps import (
    get_client_ip,
    get_current_token_payload,
    get_get_user_by_id_use_case,
    get_login_user_use_case,
    get_refresh_token_use_case,
    get_register_user_use_case,
    get_revoke_all_user_tokens_use_case,
    get_revoke_token_use_case,
)
from doorstep_auth.api.schemas.auth import (
    ApiResponse,
    AuthResultResponse,
    LoginRequest,
    LogoutResponse,
    RefreshTokenRequest,
    RegisterRequest,
    UserProfileResponse,
)
from doorstep_auth.application.dto.auth import (
    AccessTokenPayload,
    AuthResultOutput,
    LoginUserInput,
    RefreshTokenInput,
    RegisterUserInput,
    RevokeTokenInput,
    UserProfileOutput,
)
from doorstep_auth.application.use_cases.get_user_by_id import GetUserByIdUseCase
from doorstep_auth.application.use_cases.login_user import LoginUserUseCase
from doorstep_auth.application.use_cases.refresh_token import RefreshTokenUseCase
from doorstep_auth.application.use_cases.register_user import RegisterUserUseCase
from doorstep_auth.application.use_cases.revoke_all_user_tokens import RevokeAllUserTokensUseCase
from doorstep_auth.application.use_cases.revoke_token import RevokeTokenUseCase
from doorstep_auth.domain.exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    UserInactiveError,
)


logger = logging.getLogger(__name__)

router = APIRouter()


def _user_response(user: UserProfileOutput) -> UserProfileResponse:
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        phone_number=user.phone_number,
        roles=user.roles,
        created_at=user.created_at,
    )


def _auth_result_response(output: AuthResultOutput) -> AuthResultResponse:
    return AuthResultResponse(
        access_token=output.access_token,
        refresh_token=output.refresh_token,
        expires_at=output.access_token_expires_at,
        refresh_token_expires_at=output.refresh_token_expires_at,
        user=_user_response(output.user),
    )


@router.post(
    "/api/auth/register",
    response_model=ApiResponse[AuthResultResponse],
    status_code=201,
)
def register_user(
    req: RegisterRequest,
    ip: str = Depends(get_client_ip),
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    try:
        output = use_case.execute(
            RegisterUserInput(
                email=req.email,
                password=req.password,
                first_name=req.first_name,
                last_name=req.last_name,
                phone_number=req.phone_number,
                ip=ip,
            )
        )
    except EmailAlreadyExistsError as exc:
        logger.warning("auth_router: registration rejected: %s", exc)
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return ApiResponse[AuthResultResponse](
        success=True,
        message="User registered successfully",
        data=_auth_result_response(output),
    )


@router.post("/api/auth/login", response_model=ApiResponse[AuthResultResponse])
def login_user(
    req: LoginRequest,
    ip: str = Depends(get_client_ip),
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    try:
        output = use_case.execute(LoginUserInput(email=req.email, password=req.password, ip=ip))
    except InvalidCredentialsError as exc:
        logger.warning("auth_router: login failed from ip=%s", ip)
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except UserInactiveError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc

    return ApiResponse[AuthResultResponse](
        success=True,
        message="Login successful",
        data=_auth_result_response(output),
    )


@router.post("/api/auth/refresh", response_model=ApiResponse[AuthResultResponse])
def refresh_token(
    req: RefreshTokenRequest,
    ip: str = Depends(get_client_ip),
    use_case: RefreshTokenUseCase = Depends(get_refresh_token_use_case),
):
    try:
        output = use_case.execute(RefreshTokenInput(refresh_token=req.refresh_token, ip=ip))
    except InvalidOrExpiredTokenError as exc:
        logger.warning("auth_router: token refresh failed from ip=%s", ip)
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    return ApiResponse[AuthResultResponse](
        success=True,
        message="Token refreshed successfully",
        data=_auth_result_response(output),
    )


@router.post("/api/auth/revoke", response_model=ApiResponse[None])
def revoke_token(
    req: RefreshTokenRequest,
    ip: str = Depends(get_client_ip),
    _payload: AccessTokenPayload = Depends(get_current_token_payload),
    use_case: RevokeTokenUseCase = Depends(get_revoke_token_use_case),
):
    if not use_case.execute(RevokeTokenInput(refresh_token=req.refresh_token, ip=ip)):
        raise HTTPException(status_code=400, detail="Invalid or expired token")
    return ApiResponse[None](success=True, message="Token revoked successfully")


@router.post("/api/auth/logout", response_model=ApiResponse[LogoutResponse])
def logout(
    ip: str = Depends(get_client_ip),
    payload: AccessTokenPayload = Depends(get_current_token_payload),
    use_case: RevokeAllUserTokensUseCase = Depends(get_revoke_all_user_tokens_use_case),
):
    revoked = use_case.execute(user_id=payload.user_id, ip=ip)
    return ApiResponse[LogoutResponse](
        success=True,
        message="Logged out successfully",
        data=LogoutResponse(revoked=revoked),
    )


@router.get("/api/auth/me", response_model=ApiResponse[UserProfileResponse])
def get_current_user(
    payload: AccessTokenPayload = Depends(get_current_token_payload),
    use_case: GetUserByIdUseCase = Depends(get_get_user_by_id_use_case),
):
    user = use_case.execute(user_id=payload.user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return ApiResponse[UserProfileResponse](success=True, data=_user_response(user))
