"""
tests.test_auth_helpers

JWT issuing/validation and password hashing.
"""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from community_hub.auth.jwt import (
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
    issue_token,
    principal_from_claims,
)
from community_hub.auth.models import Principal, Role
from community_hub.auth.passwords import hash_password, verify_password

CFG = JwtConfig(alg="HS256", issuer="community-hub", audience="community-hub-api", secret="s3cret")
PRINCIPAL = Principal(id=7, email="res@example.com", role=Role.resident)


def test_token_round_trip() -> None:
    token = issue_token(cfg=CFG, principal=PRINCIPAL)
    payload = decode_and_validate(cfg=CFG, token=token)
    assert payload["sub"] == "7"
    assert principal_from_claims(payload) == PRINCIPAL


def test_expired_token_is_rejected() -> None:
    token = issue_token(cfg=CFG, principal=PRINCIPAL, ttl=timedelta(seconds=-30))
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=token)


def test_wrong_secret_or_audience_is_rejected() -> None:
    token = issue_token(cfg=CFG, principal=PRINCIPAL)
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=JwtConfig("HS256", CFG.issuer, CFG.audience, "other"), token=token)
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=JwtConfig("HS256", CFG.issuer, "elsewhere", CFG.secret), token=token)


def test_malformed_claims_are_rejected() -> None:
    token = jwt.encode(
        {"iss": CFG.issuer, "aud": CFG.audience, "sub": "7", "iat": 0, "exp": 2**31, "role": "ROOT"},
        CFG.secret,
        algorithm="HS256",
    )
    payload = decode_and_validate(cfg=CFG, token=token)
    with pytest.raises(JwtValidationError):
        principal_from_claims(payload)


def test_password_hashing() -> None:
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "not-a-bcrypt-hash")
