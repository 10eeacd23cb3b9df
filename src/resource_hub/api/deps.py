"""
resource_hub.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Encapsulate app.state access patterns (settings/engine/sessionmaker).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from resource_hub.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The settings the app was built with (see `api.app.create_app`).
    return request.app.state.settings


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the app lifespan.
    return request.app.state.sessionmaker


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped session shared by the authz engine and the service layer.
    async with session_factory() as session:
        yield session


# --- Module Notes -----------------------------------------------------------
# FastAPI caches dependencies per request, so one request sees exactly one session.
