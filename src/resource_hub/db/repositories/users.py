"""
resource_hub.db.repositories.users

Repository for `User` entities.

Responsibilities:
- CRUD for the admin user collection and the caller's own profile.
- Act as the principal store: current role lookup by identity.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.auth.models import Role
from resource_hub.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, name: str, email: str, role: Role = Role.member) -> User:
        user = User(name=name, email=email, role=role)
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, user_id: str) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def load_role(self, identity: str) -> Role | None:
        # Read straight from the table on every request; roles are never cached.
        stmt = select(User.role).where(User.id == identity)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_all(self) -> list[User]:
        stmt = select(User).order_by(User.created_at, User.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def update(
        self,
        user: User,
        *,
        name: str | None = None,
        email: str | None = None,
        role: Role | None = None,
    ) -> User:
        if name is not None:
            user.name = name
        if email is not None:
            user.email = email
        if role is not None:
            user.role = role
        await self._session.flush()
        return user

    async def delete(self, user: User) -> None:
        await self._session.delete(user)
        await self._session.flush()
