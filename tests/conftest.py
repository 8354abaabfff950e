"""
tests.conftest

Shared fixtures: an app on a throwaway SQLite database, an ASGI client and a
seeder that writes rows directly through the app's sessionmaker.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from community_hub.api.app import create_app
from community_hub.auth.jwt import JwtConfig, issue_token
from community_hub.auth.models import Principal, Role
from community_hub.auth.passwords import hash_password
from community_hub.db.models import (
    Activity,
    Amenity,
    Payment,
    PaymentStatus,
    PaymentType,
    Report,
    ReportStatus,
    Residence,
    User,
)
from community_hub.settings import Settings

PASSWORD = "secret123"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'community.db'}",
        jwt_secret="test-secret",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class Seeder:
    def __init__(self, app: FastAPI) -> None:
        self._sessionmaker = app.state.sessionmaker
        self._jwt = JwtConfig.from_settings(app.state.settings)
        self._seq = 0

    async def add(self, row: Any) -> Any:
        async with self._sessionmaker() as session:
            session.add(row)
            await session.commit()
        return row

    async def fetch(self, model: type[Any], row_id: int) -> Any:
        async with self._sessionmaker() as session:
            return await session.get(model, row_id)

    def headers(self, user: User) -> dict[str, str]:
        token = issue_token(
            cfg=self._jwt,
            principal=Principal(id=user.id, email=user.email, role=user.role),
        )
        return {"Authorization": f"Bearer {token}"}

    async def user(self, *, id: int | None = None, role: Role = Role.resident, **kw: Any) -> User:
        self._seq += 1
        values: dict[str, Any] = {
            "first_name": "Test",
            "last_name": f"User{self._seq}",
            "email": f"user{self._seq}@example.com",
            "password_hash": PASSWORD_HASH,
            "phone": "555-0100",
            "role": role,
        }
        values.update(kw)
        if id is not None:
            values["id"] = id
        return await self.add(User(**values))

    async def admin(self, **kw: Any) -> User:
        return await self.user(role=Role.admin, **kw)

    async def residence(self, **kw: Any) -> Residence:
        values: dict[str, Any] = {
            "name": "Tower A 101",
            "address": "1 Main St",
            "floor": 1,
            "apartment_number": "101",
            "square_meters": Decimal("80.50"),
            "bedrooms": 2,
            "bathrooms": 1,
            "monthly_rent": Decimal("1200.00"),
        }
        values.update(kw)
        return await self.add(Residence(**values))

    async def report(self, *, user_id: int, **kw: Any) -> Report:
        values: dict[str, Any] = {
            "user_id": user_id,
            "title": "Leaking faucet",
            "description": "Kitchen faucet drips",
            "category": "Water",
            "status": ReportStatus.pending,
        }
        values.update(kw)
        return await self.add(Report(**values))

    async def payment(self, *, user_id: int, residence_id: int, **kw: Any) -> Payment:
        values: dict[str, Any] = {
            "user_id": user_id,
            "residence_id": residence_id,
            "amount": Decimal("1200.00"),
            "type": PaymentType.rent,
            "status": PaymentStatus.pending,
            "due_date": date(2025, 12, 5),
        }
        values.update(kw)
        return await self.add(Payment(**values))

    async def activity(self, **kw: Any) -> Activity:
        values: dict[str, Any] = {
            "title": "Yoga",
            "date": date.today() + timedelta(days=3),
            "start_time": time(9, 0),
            "end_time": time(10, 0),
            "location": "Garden",
        }
        values.update(kw)
        return await self.add(Activity(**values))

    async def amenity(self, **kw: Any) -> Amenity:
        values: dict[str, Any] = {"name": "Pool", "location": "Rooftop"}
        values.update(kw)
        return await self.add(Amenity(**values))


@pytest_asyncio.fixture
async def seed(app: FastAPI) -> Seeder:
    return Seeder(app)


def at(day: int, hour: int = 12) -> datetime:
    return datetime(2025, 1, day, hour, 0, 0)
