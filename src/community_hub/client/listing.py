"""
community_hub.client.listing

List controller: filter state -> debounced, paged reloads.

Responsibilities:
- Hold filter and page state and expose the current page of rows and the total.
- Debounce filter changes (quiet period, default 400 ms) and reset to page 1.
- Skip reloads whose normalized query equals the one already shown or in flight.
- Let the newest request win: a new request cancels the in-flight one, and a
  response belonging to an older request is never applied.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from community_hub.client.api import ApiError, ListPage
from community_hub.observability.logging import get_logger
from community_hub.query.normalizer import DEFAULT_LIMIT, FilterQuery, normalize_filters
from community_hub.settings import Settings

log = get_logger(__name__)

Fetch = Callable[[FilterQuery], Awaitable[ListPage]]
# (level, message); level is "success", "info" or "error".
Notifier = Callable[[str, str], None]


class ListController:
    def __init__(
        self,
        *,
        fetch: Fetch,
        debounce_seconds: float = 0.4,
        page_size: int = DEFAULT_LIMIT,
        filters: Mapping[str, Any] | None = None,
        notify: Notifier | None = None,
    ) -> None:
        self._fetch = fetch
        self._debounce_seconds = debounce_seconds
        self._filters: dict[str, Any] = dict(filters or {})
        self._page = 1
        self._limit = page_size
        self._notify = notify

        self.rows: list[dict[str, Any]] = []
        self.total = 0
        self.loading = False
        self.error: ApiError | None = None

        self._generation = 0
        self._requested: FilterQuery | None = None
        self._debounce_task: asyncio.Task[None] | None = None
        self._request_task: asyncio.Task[None] | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        fetch: Fetch,
        filters: Mapping[str, Any] | None = None,
        notify: Notifier | None = None,
    ) -> ListController:
        return cls(
            fetch=fetch,
            debounce_seconds=settings.list_debounce_seconds,
            page_size=settings.default_page_size,
            filters=filters,
            notify=notify,
        )

    @property
    def filters(self) -> dict[str, Any]:
        return dict(self._filters)

    @property
    def page(self) -> int:
        return self._page

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def query(self) -> FilterQuery:
        return normalize_filters({**self._filters, "page": self._page, "limit": self._limit})

    async def load(self) -> None:
        """Fetch the current query now and wait for it (initial load, refresh after a write)."""
        self._cancel_debounce()
        self._start(self.query)
        await self.settle()

    def set_filters(self, changes: Mapping[str, Any] | None = None, **more: Any) -> None:
        self._filters.update(changes or {})
        self._filters.update(more)
        self._page = 1
        self._schedule()

    def clear_filters(self) -> None:
        self._filters.clear()
        self._page = 1
        self._schedule()

    def set_page(self, page: int, *, limit: int | None = None) -> None:
        self._page = page
        if limit is not None:
            self._limit = limit
        # Page changes skip the quiet period.
        self._cancel_debounce()
        query = self.query
        self._page = query.page
        if query != self._requested:
            self._start(query)

    async def settle(self) -> None:
        """Wait until no debounce or request is pending."""
        while True:
            pending = [
                t for t in (self._debounce_task, self._request_task) if t is not None and not t.done()
            ]
            if not pending:
                return
            await asyncio.wait(pending)

    async def aclose(self) -> None:
        self._cancel_debounce()
        if self._request_task is not None and not self._request_task.done():
            self._request_task.cancel()
        self._generation += 1
        await self.settle()
        self.loading = False

    def _schedule(self) -> None:
        self._cancel_debounce()
        self._debounce_task = asyncio.create_task(self._debounced())

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    async def _debounced(self) -> None:
        await asyncio.sleep(self._debounce_seconds)
        query = self.query
        if query == self._requested:
            return
        self._start(query)

    def _start(self, query: FilterQuery) -> None:
        if self._request_task is not None and not self._request_task.done():
            self._request_task.cancel()
        self._generation += 1
        self._requested = query
        self.loading = True
        self._request_task = asyncio.create_task(self._run(query, self._generation))

    async def _run(self, query: FilterQuery, generation: int) -> None:
        try:
            page = await self._fetch(query)
        except ApiError as e:
            if generation != self._generation:
                return
            self.loading = False
            self.error = e
            # A failed query may be asked for again.
            self._requested = None
            log.warning("list_load_failed", status=e.status_code, message=e.message)
            if self._notify is not None:
                self._notify("error", e.message)
            return

        if generation != self._generation:
            return
        self.rows = page.items
        self.total = page.total
        self.loading = False
        self.error = None


# --- Module Notes -----------------------------------------------------------
# Cancellation is cooperative: a fetch that ignores cancellation still finishes,
# but the generation check keeps its result off the screen.
