"""
community_hub.auth.models

Auth domain models.

Responsibilities:
- Define the role enumeration shared by tokens, ORM rows and policies.
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Role(enum.StrEnum):
    admin = "ADMIN"
    resident = "RESIDENT"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, resolved once per request from the token.
    """

    id: int
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is passed explicitly into services and the access filter.
