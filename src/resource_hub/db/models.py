"""
resource_hub.db.models

Persistence schema.

Responsibilities:
- User: identity and current role (the principal store).
- Resource: owned records protected by the ownership policy.
- AuditEvent: append-only trail of resource mutations.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resource_hub.auth.models import Role
from resource_hub.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC timestamps; SQLite does not keep tzinfo anyway.
    return datetime.now(tz=UTC).replace(tzinfo=None)


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    # Opaque identity; also the JWT subject.
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    role: Mapped[Role] = mapped_column(Enum(Role), nullable=False, default=Role.member)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class Resource(Base):
    __tablename__ = "resources"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Set once at creation from the creating principal; never updated.
    owner: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # Owner details for responses. Not a foreign key: deleting a user leaves
    # their resources in place, so this may resolve to None.
    owner_user: Mapped[User | None] = relationship(
        primaryjoin="foreign(Resource.owner) == User.id",
        viewonly=True,
        lazy="raise",
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class AuditEvent(Base):
    __tablename__ = "audit_events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    entity_type: Mapped[str] = mapped_column(String(32), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    actor: Mapped[str] = mapped_column(String(36), nullable=False)
    event_type: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)

    __table_args__ = (Index("ix_audit_entity_created", "entity_type", "entity_id", "created_at"),)
