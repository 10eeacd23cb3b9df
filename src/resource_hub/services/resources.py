"""
resource_hub.services.resources

Resource operation executor (transaction + audit owner).

Responsibilities:
- Execute resource operations that the authorization engine already allowed.
- Stamp ownership on create and keep it immutable on update.
- Append audit events and log mutations.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.auth.models import Principal
from resource_hub.authz.operations import EntityType
from resource_hub.authz.ownership_policy import stamp_owner
from resource_hub.db.models import AuditEvent, Resource
from resource_hub.db.repositories.audit import AuditRepo
from resource_hub.db.repositories.records import SqlRecordStore
from resource_hub.db.repositories.resources import ResourceRepo
from resource_hub.errors import RecordNotFound
from resource_hub.observability.logging import get_logger

log = get_logger(__name__)

_EDITABLE = ("name", "description")


class ResourceService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._resources = ResourceRepo(session)
        self._audit = AuditRepo(session)
        self._records = SqlRecordStore(session)

    async def list_visible(self, *, scope_owner: str | None) -> list[Resource]:
        return list(await self._records.list_scoped_by(EntityType.resource, scope_owner))

    async def get(self, resource_id: str) -> Resource:
        resource = await self._resources.get(resource_id)
        if resource is None:
            raise RecordNotFound(EntityType.resource, resource_id)
        return resource

    async def create(self, *, principal: Principal, payload: dict[str, Any]) -> Resource:
        fields = stamp_owner(principal, payload)
        resource = await self._resources.create(
            owner=fields["owner"],
            name=fields["name"],
            description=fields.get("description"),
        )
        await self._record(principal, resource.id, "RESOURCE_CREATED", {"name": resource.name})
        await self._session.commit()
        log.info("resource.created", resource_id=resource.id, owner=resource.owner)
        # Reload so the response carries owner details.
        return await self.get(resource.id)

    async def update(
        self,
        *,
        principal: Principal,
        resource_id: str,
        changes: dict[str, Any],
    ) -> Resource:
        resource = await self.get(resource_id)
        # Ownership is immutable: only name/description are applied, and name is required.
        fields = {key: changes[key] for key in _EDITABLE if key in changes}
        if "name" in fields and fields["name"] is None:
            del fields["name"]
        resource = await self._resources.update(resource, fields=fields)
        await self._record(principal, resource.id, "RESOURCE_UPDATED", {"fields": sorted(fields)})
        await self._session.commit()
        log.info("resource.updated", resource_id=resource.id, actor=principal.identity)
        return resource

    async def delete(self, *, principal: Principal, resource_id: str) -> None:
        resource = await self.get(resource_id)
        owner = resource.owner
        await self._resources.delete(resource)
        await self._record(principal, resource_id, "RESOURCE_DELETED", {"owner": owner})
        await self._session.commit()
        log.info("resource.deleted", resource_id=resource_id, actor=principal.identity)

    async def audit_trail(self, resource_id: str) -> list[AuditEvent]:
        return await self._audit.list_for_entity(EntityType.resource.value, resource_id)

    async def _record(
        self, principal: Principal, resource_id: str, event_type: str, details: dict[str, Any]
    ) -> None:
        await self._audit.add(
            entity_type=EntityType.resource.value,
            entity_id=resource_id,
            actor=principal.identity,
            event_type=event_type,
            details=details,
        )


# --- Module Notes -----------------------------------------------------------
# Callers reach this service only through an Allow decision; it performs no
# authorization of its own.
