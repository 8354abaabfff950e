"""
community_hub.services.users

User accounts: admin management and self-service profile.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.access.policy import POLICIES
from community_hub.auth.models import Principal
from community_hub.auth.passwords import hash_password
from community_hub.db.models import User
from community_hub.db.repositories.users import UserRepo
from community_hub.errors import Conflict, NotFound
from community_hub.observability.logging import get_logger
from community_hub.services.resources import ResourceService

log = get_logger(__name__)


class UserService(ResourceService[User]):
    def __init__(self, *, session: AsyncSession, principal: Principal) -> None:
        self._users = UserRepo(session)
        super().__init__(
            session=session,
            repo=self._users,
            policy=POLICIES["users"],
            principal=principal,
        )

    async def get_profile(self) -> User:
        user = await self._users.get(self._principal.id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def update_profile(self, changes: Mapping[str, Any]) -> User:
        user = await self.get_profile()
        # Role comes from the token only; a profile payload can never change it.
        values = {k: v for k, v in changes.items() if k not in ("role", "is_active")}
        if not values:
            return user
        values = await self._prepare(values, row=user)
        await self._check_references(values)
        updated = await self._users.update(user, values)
        await self._session.commit()
        log.info("profile_updated", id=user.id, fields=sorted(values))
        return updated

    async def _prepare(self, values: dict[str, Any], *, row: User | None) -> dict[str, Any]:
        values = dict(values)
        if "password" in values:
            values["password_hash"] = hash_password(values.pop("password"))
        email = values.get("email")
        if email is not None:
            existing = await self._users.get_by_email(email)
            if existing is not None and (row is None or existing.id != row.id):
                raise Conflict("Email already in use")
        return values
