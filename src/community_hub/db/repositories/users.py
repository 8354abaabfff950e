from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from community_hub.auth.models import Role
from community_hub.db.models import Residence, User
from community_hub.db.repositories.base import ResourceRepo
from community_hub.query.spec import FilterField, ListSpec, parse_bool, parse_enum, parse_int


class UserRepo(ResourceRepo[User]):
    model = User
    list_spec = ListSpec(
        search=(User.first_name, User.last_name, User.email, User.phone),
        filters={
            "role": FilterField(User.role, parse_enum(Role)),
            "residenceId": FilterField(User.residence_id, parse_int),
            "isActive": FilterField(User.is_active, parse_bool),
        },
        sortable={
            "lastName": User.last_name,
            "email": User.email,
            "createdAt": User.created_at,
        },
        default_order=(User.id.asc(),),
    )
    load_options = (selectinload(User.residence),)
    references = {"residence_id": Residence}

    async def get_by_email(self, email: str) -> User | None:
        stmt = self._select().where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def is_active(self, user_id: int) -> bool:
        # Hot path for every authenticated request: a single column, no relationships.
        stmt = select(User.is_active).where(User.id == user_id)
        return bool((await self._session.execute(stmt)).scalar_one_or_none())
