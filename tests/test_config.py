from __future__ import annotations

from doorstep_auth.shared.config import get_settings


def test_settings_defaults(monkeypatch):
    for name in (
        "DATABASE_URL",
        "JWT_SECRET",
        "JWT_ISSUER",
        "JWT_AUDIENCE",
        "JWT_ACCESS_TTL_MINUTES",
        "JWT_REFRESH_TTL_DAYS",
        "CORS_ALLOW_ORIGINS",
        "SEED_ROLES_ON_STARTUP",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.jwt_secret == ""
    assert settings.jwt.issuer == "AtYourDoorStep"
    assert settings.jwt.audience == "AtYourDoorStep"
    assert settings.jwt.access_ttl_minutes == 60
    assert settings.jwt.refresh_ttl_days == 7
    assert settings.cors_allow_origins == ["*"]
    assert settings.seed_roles_on_startup is True


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("JWT_ACCESS_TTL_MINUTES", "15")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("SEED_ROLES_ON_STARTUP", "false")

    settings = get_settings()

    assert settings.jwt.secret == "from-env"
    assert settings.jwt.access_ttl_minutes == 15
    assert settings.cors_allow_origins == ["https://a.example", "https://b.example"]
    assert settings.seed_roles_on_startup is False


def test_password_hash_rounds_unset_leaves_scheme_default(monkeypatch):
    monkeypatch.delenv("PASSWORD_HASH_ROUNDS", raising=False)
    monkeypatch.setenv("PASSWORD_HASH_SCHEME", "bcrypt")

    settings = get_settings()

    assert settings.password_hash_scheme == "bcrypt"
    assert settings.password_hash_rounds is None
