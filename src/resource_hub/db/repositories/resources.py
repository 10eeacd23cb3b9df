"""
resource_hub.db.repositories.resources

Repository for `Resource` entities.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from resource_hub.db.models import Resource


class ResourceRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, owner: str, name: str, description: str | None = None) -> Resource:
        resource = Resource(owner=owner, name=name, description=description)
        self._session.add(resource)
        await self._session.flush()
        return resource

    async def get(self, resource_id: str) -> Resource | None:
        stmt = (
            select(Resource)
            .where(Resource.id == resource_id)
            .options(selectinload(Resource.owner_user))
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def load_owner(self, resource_id: str) -> str | None:
        stmt = select(Resource.owner).where(Resource.id == resource_id)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_scoped_by(self, owner: str | None) -> list[Resource]:
        # The owner filter is part of the query, never a post-fetch filter.
        stmt = (
            select(Resource)
            .options(selectinload(Resource.owner_user))
            .order_by(Resource.created_at, Resource.id)
        )
        if owner is not None:
            stmt = stmt.where(Resource.owner == owner)
        return list((await self._session.execute(stmt)).scalars().all())

    async def update(self, resource: Resource, *, fields: Mapping[str, Any]) -> Resource:
        # Only keys present are written; an explicit None clears a nullable column.
        for key, value in fields.items():
            setattr(resource, key, value)
        await self._session.flush()
        return resource

    async def delete(self, resource: Resource) -> None:
        await self._session.delete(resource)
        await self._session.flush()
