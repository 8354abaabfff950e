"""
tests.test_api_auth

Login, registration, profile and token handling over HTTP.
"""

from __future__ import annotations

import httpx
import pytest

from community_hub.api.app import create_app
from community_hub.auth.models import Role
from community_hub.settings import Settings
from tests.conftest import PASSWORD, Seeder

REGISTRATION = {
    "firstName": "Ana",
    "lastName": "Lopez",
    "email": "Ana@Example.com",
    "password": "secret123",
    "phone": "555-0101",
}


@pytest.mark.asyncio
async def test_register_forces_resident_role(client: httpx.AsyncClient) -> None:
    r = await client.post("/api/auth/register", json={**REGISTRATION, "role": "ADMIN"})
    assert r.status_code == 201
    body = r.json()
    assert body["user"]["role"] == "RESIDENT"
    assert body["user"]["email"] == "ana@example.com"
    assert "passwordHash" not in body["user"]

    r = await client.get(
        "/api/users/profile", headers={"Authorization": f"Bearer {body['token']}"}
    )
    assert r.status_code == 200
    assert r.json()["firstName"] == "Ana"


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client: httpx.AsyncClient) -> None:
    assert (await client.post("/api/auth/register", json=REGISTRATION)).status_code == 201
    r = await client.post("/api/auth/register", json=REGISTRATION)
    assert r.status_code == 409
    assert r.json() == {"message": "User already exists", "status": 409}


@pytest.mark.asyncio
async def test_register_validation_errors_are_field_level(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/auth/register",
        json={**REGISTRATION, "email": "not-an-email", "password": "123", "nickname": "x"},
    )
    assert r.status_code == 400
    body = r.json()
    assert body["status"] == 400
    assert body["message"] == "Validation error"
    assert set(body["errors"]) == {"email", "password", "nickname"}


@pytest.mark.asyncio
async def test_login(client: httpx.AsyncClient, seed: Seeder) -> None:
    user = await seed.user(email="res@example.com")

    r = await client.post("/api/auth/login", json={"email": "RES@example.com", "password": PASSWORD})
    assert r.status_code == 200
    assert r.json()["user"]["id"] == user.id
    assert r.json()["token"]

    for email, password in (("res@example.com", "wrong-pass"), ("nobody@example.com", PASSWORD)):
        r = await client.post("/api/auth/login", json={"email": email, "password": password})
        assert r.status_code == 401
        assert r.json() == {"message": "Invalid credentials", "status": 401}


@pytest.mark.asyncio
async def test_inactive_account_cannot_log_in_or_use_old_token(
    client: httpx.AsyncClient, seed: Seeder
) -> None:
    user = await seed.user(email="gone@example.com", is_active=False)

    r = await client.post("/api/auth/login", json={"email": "gone@example.com", "password": PASSWORD})
    assert r.status_code == 401

    r = await client.get("/api/users/profile", headers=seed.headers(user))
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_missing_or_invalid_token(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/reports")
    assert r.status_code == 401
    assert r.json()["message"] == "Missing bearer token"

    r = await client.get("/api/reports", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_profile_update_cannot_change_role(client: httpx.AsyncClient, seed: Seeder) -> None:
    user = await seed.user()
    r = await client.put(
        "/api/users/profile",
        headers=seed.headers(user),
        json={"firstName": "Renamed", "role": "ADMIN"},
    )
    assert r.status_code == 200
    assert r.json()["firstName"] == "Renamed"
    assert r.json()["role"] == "RESIDENT"

    # isActive is not a profile field at all.
    r = await client.put("/api/users/profile", headers=seed.headers(user), json={"isActive": False})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_profile_password_change_allows_new_login(
    client: httpx.AsyncClient, seed: Seeder
) -> None:
    user = await seed.user(email="pw@example.com")
    r = await client.put(
        "/api/users/profile", headers=seed.headers(user), json={"password": "brand-new-pw"}
    )
    assert r.status_code == 200

    r = await client.post(
        "/api/auth/login", json={"email": "pw@example.com", "password": "brand-new-pw"}
    )
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_user_management_is_admin_only(client: httpx.AsyncClient, seed: Seeder) -> None:
    resident = await seed.user()
    admin = await seed.admin()

    r = await client.get("/api/users", headers=seed.headers(resident))
    assert r.status_code == 403
    assert r.json()["message"] == "Admin access required"

    r = await client.get("/api/users", headers=seed.headers(admin))
    assert r.status_code == 200
    assert r.json()["total"] == 2

    r = await client.get("/api/users", headers=seed.headers(admin), params={"role": "admin"})
    assert [u["id"] for u in r.json()["data"]] == [admin.id]


@pytest.mark.asyncio
async def test_admin_creates_and_updates_users(client: httpx.AsyncClient, seed: Seeder) -> None:
    admin = await seed.admin(email="boss@example.com")
    body = {
        "firstName": "New",
        "lastName": "Resident",
        "email": "new@example.com",
        "password": "secret123",
        "phone": "555-0199",
        "role": "RESIDENT",
    }
    r = await client.post("/api/users", headers=seed.headers(admin), json=body)
    assert r.status_code == 201
    created = r.json()

    r = await client.post("/api/users", headers=seed.headers(admin), json=body)
    assert r.status_code == 409
    assert r.json()["message"] == "Email already in use"

    r = await client.put(
        f"/api/users/{created['id']}",
        headers=seed.headers(admin),
        json={"email": "boss@example.com"},
    )
    assert r.status_code == 409

    r = await client.put(
        f"/api/users/{created['id']}", headers=seed.headers(admin), json={"residenceId": 999}
    )
    assert r.status_code == 400
    assert "residenceId" in r.json()["errors"]

    r = await client.delete(f"/api/users/{created['id']}", headers=seed.headers(admin))
    assert r.status_code == 204
    r = await client.get(f"/api/users/{created['id']}", headers=seed.headers(admin))
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"


@pytest.mark.asyncio
async def test_bootstrap_admin_is_created_on_startup(tmp_path) -> None:
    settings = Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'boot.db'}",
        bootstrap_admin_email="Root@Example.com",
        bootstrap_admin_password="root-pass-1",
    )
    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.post(
                "/api/auth/login", json={"email": "root@example.com", "password": "root-pass-1"}
            )
    assert r.status_code == 200
    assert r.json()["user"]["role"] == Role.admin.value
