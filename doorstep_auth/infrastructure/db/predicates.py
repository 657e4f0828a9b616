from __future__ import annotations

from sqlalchemy import Table, false


def not_deleted(table: Table):
    """Soft-delete filter applied by every repository query."""
    return table.c.is_deleted.is_(false())
