"""
resource_hub.db.repositories.records

SQL-backed record store used by the authorization engine.

Responsibilities:
- Resolve the owner of a record by entity type (existence + ownership input).
- List records of an entity type, optionally scoped to one owner.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.authz.operations import EntityType
from resource_hub.db.repositories.resources import ResourceRepo
from resource_hub.db.repositories.users import UserRepo


class SqlRecordStore:
    def __init__(self, session: AsyncSession) -> None:
        self._resources = ResourceRepo(session)
        self._users = UserRepo(session)

    async def load_owner(self, entity_type: EntityType, record_id: str) -> str | None:
        if entity_type is EntityType.resource:
            return await self._resources.load_owner(record_id)
        # A user record is owned by the user itself.
        user = await self._users.get(record_id)
        return user.id if user is not None else None

    async def list_scoped_by(self, entity_type: EntityType, owner: str | None) -> Sequence[Any]:
        if entity_type is EntityType.resource:
            return await self._resources.list_scoped_by(owner)
        if owner is None:
            return await self._users.list_all()
        user = await self._users.get(owner)
        return [user] if user is not None else []
