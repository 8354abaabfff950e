"""
tests.test_client

API client and form orchestration against the in-process app.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from community_hub.api.schemas.payments import PaymentCreate, PaymentUpdate
from community_hub.api.schemas.reports import ReportCreate, ReportUpdate
from community_hub.client import (
    ApiError,
    CommunityApiClient,
    ListController,
    ResourceForm,
    list_fetcher,
)
from community_hub.client.api import ClientLimits
from community_hub.settings import Settings
from tests.conftest import PASSWORD, Seeder


@pytest_asyncio.fixture
async def api(client: httpx.AsyncClient) -> CommunityApiClient:
    return CommunityApiClient(http=client)


@pytest.mark.asyncio
async def test_login_returns_explicit_session(api: CommunityApiClient, seed: Seeder) -> None:
    user = await seed.user(email="res@example.com")
    session = await api.login(email="res@example.com", password=PASSWORD)

    assert session.user_id == user.id
    assert not session.is_admin
    assert api.session is None

    me = api.with_session(session)
    profile = await me.get_profile()
    assert profile["email"] == "res@example.com"


@pytest.mark.asyncio
async def test_errors_carry_status_message_and_fields(
    api: CommunityApiClient, seed: Seeder
) -> None:
    with pytest.raises(ApiError) as exc:
        await api.login(email="nobody@example.com", password="whatever")
    assert exc.value.status_code == 401
    assert exc.value.message == "Invalid credentials"

    await seed.user(email="res@example.com")
    me = api.with_session(await api.login(email="res@example.com", password=PASSWORD))
    with pytest.raises(ApiError) as exc:
        await me.list("users")
    assert exc.value.status_code == 403

    with pytest.raises(ApiError) as exc:
        await me.list("reports", {"colour": "red"})
    assert exc.value.errors == {"colour": "Unknown filter"}


@pytest.mark.asyncio
async def test_list_controller_over_http(api: CommunityApiClient, seed: Seeder) -> None:
    user = await seed.user(email="res@example.com")
    await seed.report(user_id=user.id, title="Water leak")
    await seed.report(user_id=user.id, title="Broken light")
    me = api.with_session(await api.login(email="res@example.com", password=PASSWORD))

    ctl = ListController(fetch=list_fetcher(me, "reports"), debounce_seconds=0.01)
    await ctl.load()
    assert ctl.total == 2

    ctl.set_filters(search="leak", status="")
    await ctl.settle()
    assert ctl.total == 1
    assert ctl.rows[0]["title"] == "Water leak"


@pytest.mark.asyncio
async def test_create_form_validates_then_submits(api: CommunityApiClient, seed: Seeder) -> None:
    await seed.user(email="res@example.com")
    me = api.with_session(await api.login(email="res@example.com", password=PASSWORD))
    notes: list[tuple[str, str]] = []
    saved: list[dict] = []
    form = ResourceForm(
        client=me,
        resource="reports",
        create_schema=ReportCreate,
        update_schema=ReportUpdate,
        notify=lambda *n: notes.append(n),
        on_success=saved.append,
    )
    await form.load()
    assert not form.is_edit

    form.update({"title": "", "description": "Drip", "category": "Water"})
    assert await form.submit() is None
    assert set(form.errors) == {"title"}
    assert notes[-1][0] == "error"

    form.set("title", "Leaking faucet")
    assert "title" not in form.errors
    result = await form.submit()

    assert result is not None
    assert result["userId"] == me.session.user_id
    assert result["priority"] == "MEDIUM"
    assert saved == [result]
    assert notes[-1] == ("success", "Report created")


@pytest.mark.asyncio
async def test_edit_form_sends_only_changes(api: CommunityApiClient, seed: Seeder) -> None:
    user = await seed.user(email="res@example.com")
    report = await seed.report(user_id=user.id, description="Original")
    me = api.with_session(await api.login(email="res@example.com", password=PASSWORD))
    notes: list[tuple[str, str]] = []
    form = ResourceForm(
        client=me,
        resource="reports",
        create_schema=ReportCreate,
        update_schema=ReportUpdate,
        entity_id=report.id,
        notify=lambda *n: notes.append(n),
    )
    await form.load()
    assert form.values["description"] == "Original"
    assert "id" not in form.values

    assert await form.submit() is None
    assert notes[-1] == ("info", "No changes to save")

    form.set("description", "Dripping faster")
    assert form.changes() == {"description": "Dripping faster"}
    result = await form.submit()
    assert result["description"] == "Dripping faster"
    assert notes[-1] == ("success", "Report updated")
    assert form.changes() == {}


@pytest.mark.asyncio
async def test_form_maps_server_field_errors(api: CommunityApiClient, seed: Seeder) -> None:
    await seed.admin(email="boss@example.com")
    home = await seed.residence()
    admin = api.with_session(await api.login(email="boss@example.com", password=PASSWORD))
    notes: list[tuple[str, str]] = []
    form = ResourceForm(
        client=admin,
        resource="payments",
        create_schema=PaymentCreate,
        update_schema=PaymentUpdate,
        notify=lambda *n: notes.append(n),
    )
    form.update(
        {
            "userId": 999,
            "residenceId": home.id,
            "amount": "100.00",
            "type": "RENT",
            "dueDate": "2026-01-01",
        }
    )
    assert await form.submit() is None
    assert set(form.errors) == {"userId"}
    assert notes[-1] == ("error", "Validation error")


def test_client_limits_follow_settings() -> None:
    limits = ClientLimits.from_settings(Settings(default_page_size=20, max_page_size=40))
    assert limits == ClientLimits(default_limit=20, max_limit=40)
