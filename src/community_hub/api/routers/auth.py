"""
community_hub.api.routers.auth

Public authentication endpoints (no bearer token required).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.api.deps import db_session, settings_dep
from community_hub.api.schemas.users import AuthResponse, LoginRequest, RegisterRequest, UserOut
from community_hub.services.auth_service import AuthResult, AuthService
from community_hub.settings import Settings

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _response(result: AuthResult) -> AuthResponse:
    return AuthResponse(token=result.token, user=UserOut.model_validate(result.user))


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AuthResponse:
    result = await AuthService(session=session, settings=settings).login(
        email=body.email, password=body.password
    )
    return _response(result)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AuthResponse:
    # RegisterRequest has already discarded any `role`; the service forces RESIDENT anyway.
    result = await AuthService(session=session, settings=settings).register(body.to_values())
    return _response(result)
