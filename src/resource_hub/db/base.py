"""
resource_hub.db.base

SQLAlchemy declarative base.

Responsibilities:
- Provide the shared DeclarativeBase for the users, resources and audit tables.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# --- Module Notes -----------------------------------------------------------
# Every ORM model inherits from `Base` so `db.init_db` creates its table through
# `Base.metadata.create_all`.
