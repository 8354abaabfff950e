"""
community_hub.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal`.
- Reject tokens of deleted or deactivated accounts.
- Gate admin-only routes.
"""

from __future__ import annotations

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.api.deps import db_session, settings_dep
from community_hub.auth.jwt import (
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
    principal_from_claims,
)
from community_hub.auth.models import Principal
from community_hub.db.repositories.users import UserRepo
from community_hub.errors import Forbidden, Unauthenticated
from community_hub.observability.logging import get_logger
from community_hub.settings import Settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
    session: AsyncSession = Depends(db_session),
) -> Principal:
    if creds is None or not creds.credentials:
        raise Unauthenticated("Missing bearer token")

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
        principal = principal_from_claims(payload)
    except JwtValidationError as e:
        log.info("token_rejected", reason=str(e))
        raise Unauthenticated("Invalid token") from e

    # Deactivated accounts look exactly like bad tokens (401, not 403).
    if not await UserRepo(session).is_active(principal.id):
        log.info("token_rejected", reason="inactive account", user_id=principal.id)
        raise Unauthenticated("Invalid token")

    structlog.contextvars.bind_contextvars(user_id=principal.id)
    return principal


def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.is_admin:
        raise Forbidden("Admin access required")
    return principal


# --- Module Notes -----------------------------------------------------------
# The token's role is authoritative for the whole request; nothing in a request
# body is ever consulted for authorization.
