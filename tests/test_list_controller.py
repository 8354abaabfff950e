"""
tests.test_list_controller

Debounced, last-request-wins list reloads against a scripted fetcher.
"""

from __future__ import annotations

import asyncio

import pytest

from community_hub.client.api import ApiError, ListPage
from community_hub.client.listing import ListController
from community_hub.query.normalizer import FilterQuery
from community_hub.settings import Settings


class ScriptedFetch:
    def __init__(self) -> None:
        self.calls: list[FilterQuery] = []
        # search value -> event the fetch waits on before answering
        self.gates: dict[str | None, asyncio.Event] = {}
        self.fail_with: ApiError | None = None

    async def __call__(self, query: FilterQuery) -> ListPage:
        self.calls.append(query)
        gate = self.gates.get(query.search)
        if gate is not None:
            await gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        return ListPage(
            items=[{"search": query.search, "page": query.page}],
            total=42,
            page=query.page,
            limit=query.limit,
        )


async def _until(predicate) -> None:
    for _ in range(200):
        if predicate():
            return
        await asyncio.sleep(0.005)
    raise AssertionError("condition not reached")


@pytest.mark.asyncio
async def test_initial_load() -> None:
    fetch = ScriptedFetch()
    ctl = ListController(fetch=fetch, filters={"status": "PENDING", "search": ""})
    await ctl.load()

    assert ctl.rows == [{"search": None, "page": 1}]
    assert ctl.total == 42
    assert not ctl.loading
    assert fetch.calls[0].applied_filters == {"status": "PENDING"}
    assert fetch.calls[0].limit == 10


@pytest.mark.asyncio
async def test_rapid_filter_changes_collapse_into_one_request() -> None:
    fetch = ScriptedFetch()
    ctl = ListController(fetch=fetch, debounce_seconds=0.02)
    ctl.set_page(3)
    await ctl.settle()

    ctl.set_filters(search="l")
    ctl.set_filters(search="le")
    ctl.set_filters(search="leak")
    assert ctl.page == 1
    await ctl.settle()

    assert [q.search for q in fetch.calls] == [None, "leak"]
    assert fetch.calls[-1].page == 1
    assert ctl.rows == [{"search": "leak", "page": 1}]


@pytest.mark.asyncio
async def test_unchanged_normalized_query_is_not_reissued() -> None:
    fetch = ScriptedFetch()
    ctl = ListController(fetch=fetch, debounce_seconds=0.01)
    await ctl.load()

    ctl.set_filters(search="   ", status=None)
    await ctl.settle()
    ctl.set_page(1)
    await ctl.settle()

    assert len(fetch.calls) == 1


@pytest.mark.asyncio
async def test_page_change_skips_the_quiet_period() -> None:
    fetch = ScriptedFetch()
    ctl = ListController(fetch=fetch, debounce_seconds=30)
    ctl.set_page(2, limit=25)
    await asyncio.wait_for(ctl.settle(), timeout=1)

    assert fetch.calls[-1].page == 2
    assert fetch.calls[-1].limit == 25


@pytest.mark.asyncio
async def test_newest_request_wins() -> None:
    fetch = ScriptedFetch()
    fetch.gates["slow"] = asyncio.Event()
    ctl = ListController(fetch=fetch, debounce_seconds=0.01)

    ctl.set_filters(search="slow")
    await _until(lambda: len(fetch.calls) == 1)
    assert ctl.loading

    ctl.set_filters(search="fast")
    await ctl.settle()
    fetch.gates["slow"].set()
    await asyncio.sleep(0.01)

    assert [q.search for q in fetch.calls] == ["slow", "fast"]
    assert ctl.rows == [{"search": "fast", "page": 1}]
    assert not ctl.loading


@pytest.mark.asyncio
async def test_errors_are_reported_and_rows_kept() -> None:
    notes: list[tuple[str, str]] = []
    fetch = ScriptedFetch()
    ctl = ListController(fetch=fetch, debounce_seconds=0.01, notify=lambda *n: notes.append(n))
    await ctl.load()

    fetch.fail_with = ApiError(400, "Validation error", {"colour": "Unknown filter"})
    ctl.set_filters(colour="red")
    await ctl.settle()

    assert notes == [("error", "Validation error")]
    assert ctl.error is not None and ctl.error.errors == {"colour": "Unknown filter"}
    assert ctl.rows == [{"search": None, "page": 1}]
    assert len(fetch.calls) == 2

    # No retry on its own; asking again does re-issue the same query.
    fetch.fail_with = None
    ctl.set_filters(colour="red")
    await ctl.settle()
    assert len(fetch.calls) == 3
    assert ctl.error is None


@pytest.mark.asyncio
async def test_aclose_cancels_pending_work() -> None:
    fetch = ScriptedFetch()
    ctl = ListController(fetch=fetch, debounce_seconds=30)
    ctl.set_filters(search="never")
    await ctl.aclose()
    assert fetch.calls == []


@pytest.mark.asyncio
async def test_aclose_during_a_request_clears_loading() -> None:
    fetch = ScriptedFetch()
    fetch.gates["hang"] = asyncio.Event()
    ctl = ListController(fetch=fetch, debounce_seconds=0.01)

    ctl.set_filters(search="hang")
    await _until(lambda: len(fetch.calls) == 1)
    assert ctl.loading

    await ctl.aclose()
    assert not ctl.loading
    assert ctl.rows == []


@pytest.mark.asyncio
async def test_from_settings_uses_configured_quiet_period_and_page_size() -> None:
    fetch = ScriptedFetch()
    ctl = ListController.from_settings(
        Settings(list_debounce_seconds=30, default_page_size=25), fetch=fetch
    )
    assert ctl.limit == 25

    ctl.set_filters(search="later")
    await asyncio.sleep(0.05)
    assert fetch.calls == []

    await ctl.aclose()
