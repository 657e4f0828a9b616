from __future__ import annotations

from datetime import datetime, timezone

import pytest

from doorstep_auth.infrastructure.security.token_service import JwtTokenService
from doorstep_auth.shared.config import JwtSettings

from .fakes import FakeAuthState, FakeClock, FakePasswordHasher, FakeUnitOfWork, seed_default_roles


@pytest.fixture
def jwt_settings() -> JwtSettings:
    return JwtSettings(
        secret="test-secret-key-with-enough-length-for-hs256",
        issuer="AtYourDoorStep",
        audience="AtYourDoorStep",
        access_ttl_minutes=60,
        refresh_ttl_days=7,
    )


@pytest.fixture
def token_service(jwt_settings: JwtSettings) -> JwtTokenService:
    return JwtTokenService(jwt_settings)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime.now(timezone.utc).replace(microsecond=0))


@pytest.fixture
def auth_state() -> FakeAuthState:
    state = FakeAuthState()
    seed_default_roles(state)
    return state


@pytest.fixture
def unit_of_work(auth_state: FakeAuthState) -> FakeUnitOfWork:
    return FakeUnitOfWork(auth_state)


@pytest.fixture
def password_hasher() -> FakePasswordHasher:
    return FakePasswordHasher()
