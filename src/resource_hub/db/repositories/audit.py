"""
resource_hub.db.repositories.audit

Repository for `AuditEvent` entities.

Responsibilities:
- Append audit events for resource mutations.
- Query the audit trail of one entity.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.db.models import AuditEvent


class AuditRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        entity_type: str,
        entity_id: str,
        actor: str,
        event_type: str,
        details: dict[str, Any],
    ) -> AuditEvent:
        # Append-only: no update/delete.
        ev = AuditEvent(
            entity_type=entity_type,
            entity_id=entity_id,
            actor=actor,
            event_type=event_type,
            details=details,
        )
        self._session.add(ev)
        await self._session.flush()
        return ev

    async def list_for_entity(
        self, entity_type: str, entity_id: str, *, limit: int = 200
    ) -> list[AuditEvent]:
        # Newest first.
        stmt = (
            select(AuditEvent)
            .where(AuditEvent.entity_type == entity_type, AuditEvent.entity_id == entity_id)
            .order_by(desc(AuditEvent.created_at), desc(AuditEvent.id))
            .limit(limit)
        )
        return list((await self._session.execute(stmt)).scalars().all())
