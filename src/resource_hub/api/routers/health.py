"""
resource_hub.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Liveness probe (`/healthz`), no authentication and no I/O.
- Readiness probe (`/readyz`) that checks the principal/record database.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.api.deps import db_session

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: the process is up and serving HTTP.
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    # Readiness: every authorization decision needs the DB for role and owner lookups.
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# Probes sit outside `authorize(...)`; they must answer for orchestrators that
# carry no bearer token.
