"""
community_hub.client.api

HTTP client boundary for the community API.

Responsibilities:
- Attach the caller's bearer token from an explicit `ClientSession`.
- Normalize list filters before they go on the wire.
- Turn non-2xx responses into `ApiError` carrying the server's message and field errors.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any

import httpx

from community_hub.client.session import ClientSession
from community_hub.query.normalizer import DEFAULT_LIMIT, MAX_LIMIT, FilterQuery, normalize_filters
from community_hub.settings import Settings

RESOURCES = frozenset({"activities", "amenities", "payments", "reports", "residences", "users"})


class ApiError(Exception):
    def __init__(
        self,
        status_code: int,
        message: str,
        errors: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors: dict[str, str] = dict(errors or {})


@dataclass(frozen=True, slots=True)
class ListPage:
    items: list[dict[str, Any]]
    total: int
    page: int
    limit: int

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> ListPage:
        return cls(
            items=list(payload.get("data", [])),
            total=int(payload.get("total", 0)),
            page=int(payload.get("page", 1)),
            limit=int(payload.get("limit", DEFAULT_LIMIT)),
        )


@dataclass(frozen=True, slots=True)
class ClientLimits:
    default_limit: int = DEFAULT_LIMIT
    max_limit: int = MAX_LIMIT

    @classmethod
    def from_settings(cls, settings: Settings) -> ClientLimits:
        return cls(default_limit=settings.default_page_size, max_limit=settings.max_page_size)


class CommunityApiClient:
    """
    Thin async wrapper over `httpx.AsyncClient`.

    The httpx client (base URL, transport, timeouts) is owned by the caller;
    `with_session` derives a client that shares it but acts as another user.
    """

    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        session: ClientSession | None = None,
        limits: ClientLimits | None = None,
    ) -> None:
        self._http = http
        self._session = session
        self._limits = limits or ClientLimits()

    @property
    def session(self) -> ClientSession | None:
        return self._session

    def with_session(self, session: ClientSession | None) -> CommunityApiClient:
        return CommunityApiClient(http=self._http, session=session, limits=self._limits)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = dict(kwargs.pop("headers", None) or {})
        if self._session is not None:
            headers.update(self._session.auth_headers())
        try:
            r = await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            raise ApiError(0, f"Network error: {e}") from e

        if r.is_success:
            return r.json() if r.content else None
        raise _api_error(r)

    # Auth

    async def login(self, *, email: str, password: str) -> ClientSession:
        payload = await self._request(
            "POST", "/api/auth/login", json={"email": email, "password": password}
        )
        return ClientSession.from_auth_response(payload)

    async def register(self, values: Mapping[str, Any]) -> ClientSession:
        payload = await self._request("POST", "/api/auth/register", json=dict(values))
        return ClientSession.from_auth_response(payload)

    async def get_profile(self) -> dict[str, Any]:
        return await self._request("GET", "/api/users/profile")

    async def update_profile(self, values: Mapping[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", "/api/users/profile", json=dict(values))

    # Resources

    async def list(self, resource: str, filters: Mapping[str, Any] | None = None) -> ListPage:
        query = normalize_filters(
            filters,
            default_limit=self._limits.default_limit,
            max_limit=self._limits.max_limit,
        )
        return await self.list_page(resource, query)

    async def list_page(self, resource: str, query: FilterQuery) -> ListPage:
        payload = await self._request("GET", _path(resource), params=query.to_params())
        return ListPage.from_json(payload)

    async def get(self, resource: str, row_id: int) -> dict[str, Any]:
        return await self._request("GET", _path(resource, row_id))

    async def create(self, resource: str, values: Mapping[str, Any]) -> dict[str, Any]:
        return await self._request("POST", _path(resource), json=dict(values))

    async def update(self, resource: str, row_id: int, values: Mapping[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", _path(resource, row_id), json=dict(values))

    async def delete(self, resource: str, row_id: int) -> None:
        await self._request("DELETE", _path(resource, row_id))

    async def pending_payments(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/payments/pending")

    async def upcoming_activities(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/activities/upcoming")

    async def available(self, resource: str) -> list[dict[str, Any]]:
        # Residences and amenities only.
        return await self._request("GET", f"{_path(resource)}/available")


def list_fetcher(
    client: CommunityApiClient, resource: str
) -> Callable[[FilterQuery], Awaitable[ListPage]]:
    return partial(client.list_page, resource)


def _path(resource: str, row_id: int | None = None) -> str:
    if resource not in RESOURCES:
        raise ValueError(f"Unknown resource: {resource}")
    return f"/api/{resource}" if row_id is None else f"/api/{resource}/{row_id}"


def _api_error(r: httpx.Response) -> ApiError:
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        return ApiError(
            r.status_code,
            str(body.get("message") or r.reason_phrase),
            body.get("errors") or {},
        )
    return ApiError(r.status_code, r.reason_phrase or "Request failed")


# --- Module Notes -----------------------------------------------------------
# No retries: list reloads and form submits surface the error to the user instead.
