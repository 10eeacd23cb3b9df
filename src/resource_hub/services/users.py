"""
resource_hub.services.users

User operation executor for the admin collection and the caller's own profile.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.auth.models import Principal, Role
from resource_hub.authz.operations import EntityType
from resource_hub.db.models import User
from resource_hub.db.repositories.records import SqlRecordStore
from resource_hub.db.repositories.users import UserRepo
from resource_hub.errors import Conflict, RecordNotFound
from resource_hub.observability.logging import get_logger

log = get_logger(__name__)


class UserService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._users = UserRepo(session)
        self._records = SqlRecordStore(session)

    async def register(self, *, name: str, email: str, role: Role) -> User:
        await self._ensure_email_free(email)
        user = await self._users.create(name=name, email=email, role=role)
        await self._session.commit()
        log.info("user.created", user_id=user.id, role=user.role.value)
        return user

    async def list_visible(self, *, scope_owner: str | None) -> list[User]:
        return list(await self._records.list_scoped_by(EntityType.user, scope_owner))

    async def get(self, user_id: str, *, entity_type: EntityType = EntityType.user) -> User:
        user = await self._users.get(user_id)
        if user is None:
            raise RecordNotFound(entity_type, user_id)
        return user

    async def update(
        self,
        user_id: str,
        *,
        name: str | None = None,
        email: str | None = None,
        role: Role | None = None,
        entity_type: EntityType = EntityType.user,
    ) -> User:
        user = await self.get(user_id, entity_type=entity_type)
        if email is not None and email != user.email:
            await self._ensure_email_free(email)
        previous_role = user.role
        user = await self._users.update(user, name=name, email=email, role=role)
        await self._session.commit()
        if role is not None and role is not previous_role:
            log.info("user.role_changed", user_id=user.id, role=role.value)
        return user

    async def delete(self, user_id: str) -> None:
        user = await self.get(user_id)
        await self._users.delete(user)
        await self._session.commit()
        log.info("user.deleted", user_id=user_id)

    async def get_profile(self, principal: Principal) -> User:
        return await self.get(principal.identity, entity_type=EntityType.profile)

    async def update_profile(
        self, principal: Principal, *, name: str | None, email: str | None
    ) -> User:
        # Self-service edits never touch the role.
        return await self.update(
            principal.identity, name=name, email=email, entity_type=EntityType.profile
        )

    async def _ensure_email_free(self, email: str) -> None:
        if await self._users.get_by_email(email) is not None:
            raise Conflict(f"Email {email} is already registered")
