from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from sqlalchemy import false, insert, select, update

from doorstep_auth.application.ports.refresh_token_store_port import RefreshTokenStorePort
from doorstep_auth.domain.entities.user import RefreshToken
from doorstep_auth.infrastructure.db.mappers.auth_mapper import map_row_to_refresh_token
from doorstep_auth.infrastructure.db.models.auth import refresh_tokens_table
from doorstep_auth.infrastructure.db.predicates import not_deleted


class SqlRefreshTokenRepository(RefreshTokenStorePort):
    def __init__(self, conn):
        self._conn = conn

    def find_valid_by_hash(self, *, token_hash: str, now: datetime):
        stmt = (
            select(refresh_tokens_table)
            .where(refresh_tokens_table.c.token_hash == token_hash)
            .where(refresh_tokens_table.c.is_revoked.is_(false()))
            .where(refresh_tokens_table.c.expires_at > now)
            .where(not_deleted(refresh_tokens_table))
            .limit(1)
        )
        row = self._conn.execute(stmt).mappings().first()
        if row is None:
            return None
        return map_row_to_refresh_token(row)

    def add(self, *, token: RefreshToken, now: datetime) -> RefreshToken:
        token = replace(token, created_at=now, updated_at=now)
        self._conn.execute(
            insert(refresh_tokens_table).values(
                id=token.id,
                user_id=token.user_id,
                token_hash=token.token_hash,
                expires_at=token.expires_at,
                is_revoked=token.is_revoked,
                revoked_at=token.revoked_at,
                revoked_by_ip=token.revoked_by_ip,
                replaced_by_token_hash=token.replaced_by_token_hash,
                created_by_ip=token.created_by_ip,
                created_at=token.created_at,
                updated_at=token.updated_at,
                is_deleted=False,
            )
        )
        return token

    def update(self, *, token: RefreshToken, now: datetime) -> RefreshToken:
        self._conn.execute(
            update(refresh_tokens_table)
            .where(refresh_tokens_table.c.id == token.id)
            .values(
                expires_at=token.expires_at,
                is_revoked=token.is_revoked,
                revoked_at=token.revoked_at,
                revoked_by_ip=token.revoked_by_ip,
                replaced_by_token_hash=token.replaced_by_token_hash,
                updated_at=now,
            )
        )
        return replace(token, updated_at=now)

    def revoke(self, *, token_id: str, revoked_at: datetime, revoked_by_ip: str | None) -> bool:
        result = self._conn.execute(
            update(refresh_tokens_table)
            .where(refresh_tokens_table.c.id == token_id)
            .where(refresh_tokens_table.c.is_revoked.is_(false()))
            .values(
                is_revoked=True,
                revoked_at=revoked_at,
                revoked_by_ip=revoked_by_ip,
                updated_at=revoked_at,
            )
        )
        return result.rowcount == 1

    def revoke_all_for_user(self, *, user_id: str, revoked_at: datetime, revoked_by_ip: str | None) -> int:
        result = self._conn.execute(
            update(refresh_tokens_table)
            .where(refresh_tokens_table.c.user_id == user_id)
            .where(refresh_tokens_table.c.is_revoked.is_(false()))
            .where(not_deleted(refresh_tokens_table))
            .values(
                is_revoked=True,
                revoked_at=revoked_at,
                revoked_by_ip=revoked_by_ip,
                updated_at=revoked_at,
            )
        )
        return result.rowcount
