"""
resource_hub.api.routers.resources

Resource endpoints.

Responsibilities:
- List (owner-scoped for members), read, create, update and delete resources.
- Expose the audit trail of a resource to whoever may read it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from resource_hub.api.deps import db_session
from resource_hub.api.routers.audit import AuditTrailResponse
from resource_hub.auth.deps import Authorized, authorize
from resource_hub.authz.operations import EntityType, Operation
from resource_hub.db.models import Resource
from resource_hub.services.resources import ResourceService

router = APIRouter(prefix="/v1/resources", tags=["resources"])


class ResourceCreateRequest(BaseModel):
    # Unknown keys (including any attempt to set `owner`) are dropped.
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, max_length=256)
    description: str | None = None


class ResourceUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = None


class ResourceOwnerOut(BaseModel):
    id: str
    # None once the owning user has been deleted.
    name: str | None = None
    email: str | None = None


class ResourceOut(BaseModel):
    id: str
    name: str
    description: str | None
    owner: ResourceOwnerOut
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_resource(cls, resource: Resource) -> ResourceOut:
        user = resource.owner_user
        return cls(
            id=resource.id,
            name=resource.name,
            description=resource.description,
            owner=ResourceOwnerOut(
                id=resource.owner,
                name=user.name if user is not None else None,
                email=user.email if user is not None else None,
            ),
            created_at=resource.created_at,
            updated_at=resource.updated_at,
        )


class ResourceResponse(BaseModel):
    success: bool = True
    data: ResourceOut


class ResourceListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[ResourceOut]


@router.get("", response_model=ResourceListResponse)
async def list_resources(
    auth: Authorized = Depends(authorize(Operation.list, EntityType.resource)),
    session: AsyncSession = Depends(db_session),
) -> ResourceListResponse:
    resources = await ResourceService(session=session).list_visible(
        scope_owner=auth.decision.scope_owner
    )
    return ResourceListResponse(
        count=len(resources),
        data=[ResourceOut.from_resource(r) for r in resources],
    )


@router.post("", response_model=ResourceResponse, status_code=HTTP_201_CREATED)
async def create_resource(
    body: ResourceCreateRequest,
    auth: Authorized = Depends(authorize(Operation.create, EntityType.resource)),
    session: AsyncSession = Depends(db_session),
) -> ResourceResponse:
    resource = await ResourceService(session=session).create(
        principal=auth.principal,
        payload=body.model_dump(),
    )
    return ResourceResponse(data=ResourceOut.from_resource(resource))


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: str,
    auth: Authorized = Depends(
        authorize(Operation.read, EntityType.resource, record_param="resource_id")
    ),
    session: AsyncSession = Depends(db_session),
) -> ResourceResponse:
    resource = await ResourceService(session=session).get(resource_id)
    return ResourceResponse(data=ResourceOut.from_resource(resource))


@router.put("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: str,
    body: ResourceUpdateRequest,
    auth: Authorized = Depends(
        authorize(Operation.update, EntityType.resource, record_param="resource_id")
    ),
    session: AsyncSession = Depends(db_session),
) -> ResourceResponse:
    resource = await ResourceService(session=session).update(
        principal=auth.principal,
        resource_id=resource_id,
        changes=body.model_dump(exclude_unset=True),
    )
    return ResourceResponse(data=ResourceOut.from_resource(resource))


@router.delete("/{resource_id}")
async def delete_resource(
    resource_id: str,
    auth: Authorized = Depends(
        authorize(Operation.delete, EntityType.resource, record_param="resource_id")
    ),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await ResourceService(session=session).delete(principal=auth.principal, resource_id=resource_id)
    return {"success": True, "data": {}}


@router.get("/{resource_id}/audit", response_model=AuditTrailResponse)
async def list_resource_audit(
    resource_id: str,
    auth: Authorized = Depends(
        authorize(Operation.read, EntityType.resource, record_param="resource_id")
    ),
    session: AsyncSession = Depends(db_session),
) -> AuditTrailResponse:
    events = await ResourceService(session=session).audit_trail(resource_id)
    return AuditTrailResponse.from_events(events)


# --- Module Notes -----------------------------------------------------------
# Role and ownership checks live entirely in the `authorize(...)` dependency;
# handlers only execute.
