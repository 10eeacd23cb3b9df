"""
resource_hub.api.routers.users

User endpoints.

Responsibilities:
- Self-service profile read/update for any authenticated role.
- Admin-only management of the user collection.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.api.deps import db_session
from resource_hub.auth.deps import Authorized, authorize
from resource_hub.auth.models import Role
from resource_hub.authz.operations import EntityType, Operation
from resource_hub.services.users import UserService

router = APIRouter(prefix="/v1/users", tags=["users"])


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: Role
    created_at: datetime


class UserResponse(BaseModel):
    success: bool = True
    data: UserOut


class UserListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[UserOut]


class ProfileUpdateRequest(BaseModel):
    # Only these two fields are self-editable; `role` in the body is ignored.
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=256)
    email: str | None = Field(default=None, min_length=3, max_length=320)


class UserUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=256)
    email: str | None = Field(default=None, min_length=3, max_length=320)
    role: Role | None = None


# Profile routes are declared before `/{user_id}` so "profile" is not read as an id.
@router.get("/profile", response_model=UserResponse)
async def get_profile(
    auth: Authorized = Depends(authorize(Operation.read, EntityType.profile)),
    session: AsyncSession = Depends(db_session),
) -> UserResponse:
    user = await UserService(session=session).get_profile(auth.principal)
    return UserResponse(data=UserOut.model_validate(user))


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    body: ProfileUpdateRequest,
    auth: Authorized = Depends(authorize(Operation.update, EntityType.profile)),
    session: AsyncSession = Depends(db_session),
) -> UserResponse:
    user = await UserService(session=session).update_profile(
        auth.principal, name=body.name, email=body.email
    )
    return UserResponse(data=UserOut.model_validate(user))


@router.get(
    "",
    response_model=UserListResponse,
)
async def list_users(
    auth: Authorized = Depends(authorize(Operation.list, EntityType.user)),
    session: AsyncSession = Depends(db_session),
) -> UserListResponse:
    users = await UserService(session=session).list_visible(scope_owner=auth.decision.scope_owner)
    return UserListResponse(count=len(users), data=[UserOut.model_validate(u) for u in users])


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(authorize(Operation.read, EntityType.user, record_param="user_id"))],
)
async def get_user(user_id: str, session: AsyncSession = Depends(db_session)) -> UserResponse:
    user = await UserService(session=session).get(user_id)
    return UserResponse(data=UserOut.model_validate(user))


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(authorize(Operation.update, EntityType.user, record_param="user_id"))],
)
async def update_user(
    user_id: str,
    body: UserUpdateRequest,
    session: AsyncSession = Depends(db_session),
) -> UserResponse:
    user = await UserService(session=session).update(
        user_id, name=body.name, email=body.email, role=body.role
    )
    return UserResponse(data=UserOut.model_validate(user))


@router.delete(
    "/{user_id}",
    dependencies=[Depends(authorize(Operation.delete, EntityType.user, record_param="user_id"))],
)
async def delete_user(user_id: str, session: AsyncSession = Depends(db_session)) -> dict[str, Any]:
    await UserService(session=session).delete(user_id)
    return {"success": True, "data": {}}
