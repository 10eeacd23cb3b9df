from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from resource_hub.api.deps import db_session, settings_dep
from resource_hub.api.routers.users import UserOut
from resource_hub.auth.jwt import JwtConfig, issue_token
from resource_hub.auth.models import Role
from resource_hub.services.users import UserService
from resource_hub.settings import Settings

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevUserRequest(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    email: str = Field(min_length=3, max_length=320)
    role: Role = Role.member


class DevTokenRequest(BaseModel):
    subject: str = Field(min_length=1, max_length=256)
    ttl_minutes: int | None = Field(default=None, ge=1, le=24 * 60)


class DevTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class DevUserResponse(BaseModel):
    user: UserOut
    access_token: str
    token_type: str = "bearer"


def _require_non_prod(settings: Settings = Depends(settings_dep)) -> Settings:
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")
    return settings


def _mint(settings: Settings, subject: str, ttl_minutes: int | None = None) -> str:
    return issue_token(
        cfg=JwtConfig.from_settings(settings),
        subject=subject,
        ttl=timedelta(minutes=ttl_minutes or settings.access_token_ttl_minutes),
    )


@router.post("/users", response_model=DevUserResponse, status_code=HTTP_201_CREATED)
async def seed_user(
    body: DevUserRequest,
    settings: Settings = Depends(_require_non_prod),
    session: AsyncSession = Depends(db_session),
) -> DevUserResponse:
    user = await UserService(session=session).register(
        name=body.name, email=body.email, role=body.role
    )
    return DevUserResponse(user=UserOut.model_validate(user), access_token=_mint(settings, user.id))


@router.post("/token", response_model=DevTokenResponse)
async def mint_dev_token(
    body: DevTokenRequest,
    settings: Settings = Depends(_require_non_prod),
) -> DevTokenResponse:
    # The subject is not checked here; the resolver rejects unknown subjects.
    return DevTokenResponse(access_token=_mint(settings, body.subject, body.ttl_minutes))
