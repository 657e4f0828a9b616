from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from doorstep_auth.domain.entities.user import RefreshToken, Role, User, UserRole


def _as_str(value: Any) -> str:
    return str(value)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; everything stored is UTC.
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def map_row_to_role(row: Mapping[str, Any]) -> Role:
    return Role(
        id=_as_str(row["id"]),
        name=row["name"],
        description=row.get("description") or "",
    )


def map_row_to_user_role(row: Mapping[str, Any]) -> UserRole:
    return UserRole(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        role_id=_as_str(row["role_id"]),
        created_at=_as_utc(row["created_at"]),
    )


def map_row_to_user(row: Mapping[str, Any], roles: Iterable[Role] = ()) -> User:
    return User(
        id=_as_str(row["id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        phone_number=row.get("phone_number"),
        is_email_verified=bool(row["is_email_verified"]),
        is_active=bool(row["is_active"]),
        last_login_at=_as_utc(row.get("last_login_at")),
        created_at=_as_utc(row["created_at"]),
        updated_at=_as_utc(row["updated_at"]),
        is_deleted=bool(row["is_deleted"]),
        roles=tuple(roles),
    )


def map_row_to_refresh_token(row: Mapping[str, Any]) -> RefreshToken:
    return RefreshToken(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        token_hash=row["token_hash"],
        expires_at=_as_utc(row["expires_at"]),
        is_revoked=bool(row["is_revoked"]),
        revoked_at=_as_utc(row.get("revoked_at")),
        revoked_by_ip=row.get("revoked_by_ip"),
        replaced_by_token_hash=row.get("replaced_by_token_hash"),
        created_by_ip=row.get("created_by_ip"),
        created_at=_as_utc(row["created_at"]),
        updated_at=_as_utc(row["updated_at"]),
    )
