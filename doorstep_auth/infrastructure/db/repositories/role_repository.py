from __future__ import annotations

from datetime import datetime

from sqlalchemy import insert, select

from doorstep_auth.application.ports.role_store_port import RoleStorePort
from doorstep_auth.domain.entities.user import UserRole
from doorstep_auth.infrastructure.db.mappers.auth_mapper import map_row_to_role, map_row_to_user_role
from doorstep_auth.infrastructure.db.models.auth import roles_table, user_roles_table
from doorstep_auth.infrastructure.db.predicates import not_deleted


class SqlRoleRepository(RoleStorePort):
    def __init__(self, conn):
        self._conn = conn

    def find_by_name(self, *, name: str):
        stmt = (
            select(roles_table)
            .where(roles_table.c.name == name)
            .where(not_deleted(roles_table))
            .limit(1)
        )
        row = self._conn.execute(stmt).mappings().first()
        if row is None:
            return None
        return map_row_to_role(row)

    def assign_to_user(self, *, user_role_id: str, user_id: str, role_id: str, now: datetime) -> UserRole:
        values = {
            "id": user_role_id,
            "user_id": user_id,
            "role_id": role_id,
            "created_at": now,
            "updated_at": now,
            "is_deleted": False,
        }
        self._conn.execute(insert(user_roles_table).values(**values))
        return map_row_to_user_role(values)
