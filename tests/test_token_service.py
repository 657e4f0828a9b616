from __future__ import annotations

import base64
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from doorstep_auth.domain.entities.user import Role, User
from doorstep_auth.domain.exceptions import ConfigurationError, InvalidOrExpiredTokenError
from doorstep_auth.infrastructure.security.token_service import JWT_ALGORITHM, JwtTokenService


def _user() -> User:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return User(
        id="user-1",
        email="ana@example.com",
        password_hash="hash",
        first_name="Ana",
        last_name="Silva",
        phone_number=None,
        is_email_verified=False,
        is_active=True,
        last_login_at=None,
        created_at=now,
        updated_at=now,
        roles=(Role(id="role-1", name="User", description="Standard user"),),
    )


def test_access_token_carries_identity_claims(token_service, jwt_settings):
    now = datetime.now(timezone.utc)

    token, expires_at = token_service.create_access_token(user=_user(), roles=["User", "Admin"], now=now)

    assert expires_at == now + timedelta(minutes=60)
    claims = jwt.decode(
        token,
        jwt_settings.secret,
        algorithms=[JWT_ALGORITHM],
        audience=jwt_settings.audience,
        issuer=jwt_settings.issuer,
    )
    assert claims["sub"] == "user-1"
    assert claims["email"] == "ana@example.com"
    assert claims["name"] == "Ana Silva"
    assert claims["roles"] == ["User", "Admin"]
    assert claims["jti"]
    assert claims["exp"] == int(expires_at.timestamp())

    payload = token_service.decode_access_token(token=token)
    assert payload.user_id == "user-1"
    assert payload.name == "Ana Silva"
    assert payload.roles == ["User", "Admin"]


def test_access_tokens_have_unique_ids(token_service):
    now = datetime.now(timezone.utc)
    first, _ = token_service.create_access_token(user=_user(), roles=["User"], now=now)
    second, _ = token_service.create_access_token(user=_user(), roles=["User"], now=now)

    assert token_service.decode_access_token(token=first).token_id != token_service.decode_access_token(
        token=second
    ).token_id


def test_decode_rejects_expired_foreign_and_garbage_tokens(token_service, jwt_settings):
    expired, _ = token_service.create_access_token(
        user=_user(),
        roles=["User"],
        now=datetime.now(timezone.utc) - timedelta(hours=2),
    )
    foreign = JwtTokenService(replace(jwt_settings, secret="another-secret-key-with-enough-length"))
    foreign_token, _ = foreign.create_access_token(user=_user(), roles=[], now=datetime.now(timezone.utc))
    other_audience = JwtTokenService(replace(jwt_settings, audience="SomebodyElse"))
    other_audience_token, _ = other_audience.create_access_token(
        user=_user(),
        roles=[],
        now=datetime.now(timezone.utc),
    )

    for token in (expired, foreign_token, other_audience_token, "not-a-jwt"):
        with pytest.raises(InvalidOrExpiredTokenError):
            token_service.decode_access_token(token=token)


def test_missing_secret_is_a_configuration_error(jwt_settings):
    with pytest.raises(ConfigurationError):
        JwtTokenService(replace(jwt_settings, secret=""))


def test_refresh_token_is_64_random_bytes_base64(token_service):
    first = token_service.generate_refresh_token()
    second = token_service.generate_refresh_token()

    assert len(base64.b64decode(first)) == 64
    assert first != second


def test_token_hash_is_deterministic_and_one_way(token_service):
    token = token_service.generate_refresh_token()

    token_hash = token_service.hash_token(token=token)

    assert token_hash == token_service.hash_token(token=token)
    assert token_hash != token
    assert len(base64.b64decode(token_hash)) == 32
    assert token_service.verify_token_hash(token=token, token_hash=token_hash) is True
    assert token_service.verify_token_hash(token=token + "x", token_hash=token_hash) is False


def test_refresh_token_expiry_uses_configured_days(token_service):
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    assert token_service.refresh_token_expires_at(now=now) == now + timedelta(days=7)
