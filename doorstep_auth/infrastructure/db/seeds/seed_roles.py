from __future__ import annotations

import logging
from datetime import datetime
from uuid import uuid4

from sqlalchemy import insert, select

from doorstep_auth.infrastructure.db.models.auth import roles_table


logger = logging.getLogger(__name__)

DEFAULT_ROLES = (
    ("Admin", "Administrator with full access"),
    ("Manager", "Manager with limited administrative access"),
    ("User", "Standard user"),
)


def seed_roles(engine, *, now: datetime) -> int:
    created = 0
    with engine.begin() as conn:
        for name, description in DEFAULT_ROLES:
            existing = conn.execute(
                select(roles_table.c.id).where(roles_table.c.name == name).limit(1)
            ).first()
            if existing is not None:
                continue
            conn.execute(
                insert(roles_table).values(
                    id=str(uuid4()),
                    name=name,
                    description=description,
                    created_at=now,
                    updated_at=now,
                    is_deleted=False,
                )
            )
            created += 1
    if created:
        logger.info("seed_roles: created=%s", created)
    return created
