"""
community_hub.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue access tokens carrying the principal (id/email/role).
- Decode and validate JWTs with strict claim requirements (iss/aud/exp/iat/sub).
- Convert a validated payload into a `Principal`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from community_hub.auth.models import Principal, Role
from community_hub.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
        )


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    principal: Principal,
    ttl: timedelta = timedelta(hours=24),
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": str(principal.id),
        "email": principal.email,
        "role": principal.role.value,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        # jwt.decode enforces signature + registered claims (issuer/audience/exp, etc.).
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub"],
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    try:
        user_id = int(payload["sub"])
        role = Role(payload["role"])
    except (KeyError, TypeError, ValueError) as e:
        raise JwtValidationError("malformed principal claims") from e
    email = payload.get("email")
    if not isinstance(email, str) or not email:
        raise JwtValidationError("malformed principal claims")
    return Principal(id=user_id, email=email, role=role)


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `services.auth_service` (login/register) and tests.
