from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from sqlalchemy import exists, func, insert, select, update
from sqlalchemy.exc import IntegrityError

from doorstep_auth.application.ports.user_store_port import UserStorePort
from doorstep_auth.domain.entities.user import Role, User
from doorstep_auth.domain.exceptions import EmailAlreadyExistsError
from doorstep_auth.infrastructure.db.mappers.auth_mapper import map_row_to_role, map_row_to_user
from doorstep_auth.infrastructure.db.models.auth import roles_table, user_roles_table, users_table
from doorstep_auth.infrastructure.db.predicates import not_deleted


class SqlUserRepository(UserStorePort):
    def __init__(self, conn):
        self._conn = conn

    def find_by_email(self, *, email: str):
        stmt = (
            select(users_table)
            .where(func.lower(users_table.c.email) == email.lower())
            .where(not_deleted(users_table))
            .limit(1)
        )
        row = self._conn.execute(stmt).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row, self._list_roles(user_id=row["id"]))

    def find_by_id_with_roles(self, *, user_id: str):
        stmt = (
            select(users_table)
            .where(users_table.c.id == user_id)
            .where(not_deleted(users_table))
            .limit(1)
        )
        row = self._conn.execute(stmt).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row, self._list_roles(user_id=row["id"]))

    def email_exists(self, *, email: str) -> bool:
        stmt = select(
            exists()
            .where(func.lower(users_table.c.email) == email.lower())
            .where(not_deleted(users_table))
        )
        return bool(self._conn.execute(stmt).scalar())

    def add(self, *, user: User, now: datetime) -> User:
        user = replace(user, created_at=now, updated_at=now)
        values = {
            "id": user.id,
            "email": user.email,
            "password_hash": user.password_hash,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "phone_number": user.phone_number,
            "is_email_verified": user.is_email_verified,
            "is_active": user.is_active,
            "last_login_at": user.last_login_at,
            "created_at": user.created_at,
            "updated_at": user.updated_at,
            "is_deleted": False,
        }
        try:
            self._conn.execute(insert(users_table).values(**values))
        except IntegrityError as exc:
            raise EmailAlreadyExistsError("Email already registered.") from exc
        return user

    def update(self, *, user: User, now: datetime) -> User:
        stmt = (
            update(users_table)
            .where(users_table.c.id == user.id)
            .where(not_deleted(users_table))
            .values(
                email=user.email,
                password_hash=user.password_hash,
                first_name=user.first_name,
                last_name=user.last_name,
                phone_number=user.phone_number,
                is_email_verified=user.is_email_verified,
                is_active=user.is_active,
                last_login_at=user.last_login_at,
                updated_at=now,
            )
        )
        self._conn.execute(stmt)
        return replace(user, updated_at=now)

    def _list_roles(self, *, user_id: str) -> list[Role]:
        stmt = (
            select(roles_table)
            .join(user_roles_table, user_roles_table.c.role_id == roles_table.c.id)
            .where(user_roles_table.c.user_id == user_id)
            .where(not_deleted(user_roles_table))
            .where(not_deleted(roles_table))
            .order_by(roles_table.c.name)
        )
        rows = self._conn.execute(stmt).mappings().all()
        return [map_row_to_role(row) for row in rows]
