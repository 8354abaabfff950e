"""
community_hub.api.routers.users

User endpoints: self-service profile for everyone, account management for admins.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.api.deps import db_session, list_query
from community_hub.api.schemas.common import ListResponse, to_list_response
from community_hub.api.schemas.users import ProfileUpdate, UserCreate, UserOut, UserUpdate
from community_hub.auth.deps import get_principal, require_admin
from community_hub.auth.models import Principal
from community_hub.query.normalizer import FilterQuery
from community_hub.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile", response_model=UserOut)
async def get_profile(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> UserOut:
    user = await UserService(session=session, principal=principal).get_profile()
    return UserOut.model_validate(user)


@router.put("/profile", response_model=UserOut)
async def update_profile(
    body: ProfileUpdate,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> UserOut:
    user = await UserService(session=session, principal=principal).update_profile(body.to_values())
    return UserOut.model_validate(user)


@router.get("", response_model=ListResponse[UserOut])
async def list_users(
    query: FilterQuery = Depends(list_query),
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> ListResponse[UserOut]:
    page = await UserService(session=session, principal=principal).list(query)
    return to_list_response(page, UserOut)


@router.get("/{user_id}", response_model=UserOut)
async def get_user(
    user_id: int,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> UserOut:
    user = await UserService(session=session, principal=principal).get(user_id)
    return UserOut.model_validate(user)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> UserOut:
    user = await UserService(session=session, principal=principal).create(body.to_values())
    return UserOut.model_validate(user)


@router.put("/{user_id}", response_model=UserOut)
async def update_user(
    user_id: int,
    body: UserUpdate,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> UserOut:
    user = await UserService(session=session, principal=principal).update(user_id, body.to_values())
    return UserOut.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> Response:
    await UserService(session=session, principal=principal).delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
