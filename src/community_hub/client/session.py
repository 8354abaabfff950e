"""
community_hub.client.session

Authenticated client session.

A session is a plain value returned by login/register and handed to the API
client explicitly; nothing is stored globally.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from community_hub.auth.models import Role


@dataclass(frozen=True, slots=True)
class ClientSession:
    token: str
    user_id: int
    email: str
    role: Role
    # Last user payload seen from the server (camelCase keys).
    user: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_auth_response(cls, payload: Mapping[str, Any]) -> ClientSession:
        user = payload["user"]
        return cls(
            token=payload["token"],
            user_id=int(user["id"]),
            email=user["email"],
            role=Role(user["role"]),
            user=dict(user),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}
