from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: str) -> bool:
    return (_env(name, default) or "").strip().lower() in {"1", "true", "yes", "on"}


def _optional_int(name: str) -> int | None:
    value = (_env(name) or "").strip()
    return int(value) if value else None


def _list(name: str, default: str) -> list[str]:
    value = _env(name, default) or ""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class JwtSettings:
    secret: str
    issuer: str
    audience: str
    access_ttl_minutes: int
    refresh_ttl_days: int


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt_secret: str
    jwt_issuer: str
    jwt_audience: str
    jwt_access_ttl_minutes: int
    jwt_refresh_ttl_days: int
    password_hash_scheme: str
    password_hash_rounds: int | None
    log_level: str
    cors_allow_origins: list[str]
    seed_roles_on_startup: bool

    @property
    def jwt(self) -> JwtSettings:
        return JwtSettings(
            secret=self.jwt_secret,
            issuer=self.jwt_issuer,
            audience=self.jwt_audience,
            access_ttl_minutes=self.jwt_access_ttl_minutes,
            refresh_ttl_days=self.jwt_refresh_ttl_days,
        )


def get_settings() -> Settings:
    return Settings(
        database_url=_env("DATABASE_URL", "sqlite:///./doorstep_auth.db"),
        jwt_secret=_env("JWT_SECRET", ""),
        jwt_issuer=_env("JWT_ISSUER", "AtYourDoorStep"),
        jwt_audience=_env("JWT_AUDIENCE", "AtYourDoorStep"),
        jwt_access_ttl_minutes=int(_env("JWT_ACCESS_TTL_MINUTES", "60")),
        jwt_refresh_ttl_days=int(_env("JWT_REFRESH_TTL_DAYS", "7")),
        password_hash_scheme=_env("PASSWORD_HASH_SCHEME", "argon2"),
        password_hash_rounds=_optional_int("PASSWORD_HASH_ROUNDS"),
        log_level=_env("LOG_LEVEL", "INFO"),
        cors_allow_origins=_list("CORS_ALLOW_ORIGINS", "*"),
        seed_roles_on_startup=_bool("SEED_ROLES_ON_STARTUP", "true"),
    )
