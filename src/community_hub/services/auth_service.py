"""
community_hub.services.auth_service

Login, self-registration and administrator bootstrap.

Responsibilities:
- Verify credentials and issue access tokens.
- Register resident accounts (never admins).
- Create the configured bootstrap administrator on startup.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.auth.jwt import JwtConfig, issue_token
from community_hub.auth.models import Principal, Role
from community_hub.auth.passwords import hash_password, verify_password
from community_hub.db.models import User
from community_hub.db.repositories.users import UserRepo
from community_hub.errors import Conflict, Unauthenticated
from community_hub.observability.logging import get_logger
from community_hub.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AuthResult:
    token: str
    user: User


class AuthService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._users = UserRepo(session)

    def _token_for(self, user: User) -> str:
        principal = Principal(id=user.id, email=user.email, role=user.role)
        return issue_token(
            cfg=JwtConfig.from_settings(self._settings),
            principal=principal,
            ttl=timedelta(minutes=self._settings.access_token_ttl_minutes),
        )

    async def login(self, *, email: str, password: str) -> AuthResult:
        user = await self._users.get_by_email(email)
        # One message for every failure so callers cannot probe which emails exist.
        if user is None or not user.is_active or not verify_password(password, user.password_hash):
            log.info("login_failed", email=email)
            raise Unauthenticated("Invalid credentials")
        log.info("login_succeeded", user_id=user.id)
        return AuthResult(token=self._token_for(user), user=user)

    async def register(self, values: Mapping[str, Any]) -> AuthResult:
        data = {k: v for k, v in values.items() if k != "role"}
        if await self._users.get_by_email(data["email"]) is not None:
            raise Conflict("User already exists")
        data["password_hash"] = hash_password(data.pop("password"))
        data["role"] = Role.resident

        user = await self._users.create(data)
        await self._session.commit()
        log.info("user_registered", user_id=user.id)
        return AuthResult(token=self._token_for(user), user=user)

    async def ensure_admin(self, *, email: str, password: str) -> User:
        existing = await self._users.get_by_email(email)
        if existing is not None:
            return existing
        user = await self._users.create(
            {
                "first_name": "Admin",
                "last_name": "User",
                "email": email,
                "phone": "-",
                "password_hash": hash_password(password),
                "role": Role.admin,
            }
        )
        await self._session.commit()
        log.info("bootstrap_admin_created", user_id=user.id)
        return user


# --- Module Notes -----------------------------------------------------------
# Tokens embed the role at issue time; `auth.deps.get_principal` still rejects
# tokens of accounts deactivated afterwards.
