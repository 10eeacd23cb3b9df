"""
resource_hub.api.routers.audit

Admin view of the audit log.

Responsibilities:
- Return the full trail of a resource by id, including events written after it
  was deleted.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.api.deps import db_session
from resource_hub.auth.deps import authorize
from resource_hub.authz.operations import EntityType, Operation
from resource_hub.services.resources import ResourceService

router = APIRouter(prefix="/v1/audit", tags=["audit"])


class AuditEventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_type: str
    actor: str
    details: dict[str, Any]
    created_at: datetime


class AuditTrailResponse(BaseModel):
    success: bool = True
    count: int
    data: list[AuditEventOut]

    @classmethod
    def from_events(cls, events: list[Any]) -> AuditTrailResponse:
        return cls(count=len(events), data=[AuditEventOut.model_validate(e) for e in events])


@router.get(
    "/resources/{resource_id}",
    response_model=AuditTrailResponse,
    dependencies=[Depends(authorize(Operation.list, EntityType.audit))],
)
async def resource_audit_trail(
    resource_id: str, session: AsyncSession = Depends(db_session)
) -> AuditTrailResponse:
    events = await ResourceService(session=session).audit_trail(resource_id)
    return AuditTrailResponse.from_events(events)


# --- Module Notes -----------------------------------------------------------
# `/v1/resources/{id}/audit` follows the resource read rule and so stops at 404
# once the resource is deleted; this route does not look the resource up.
