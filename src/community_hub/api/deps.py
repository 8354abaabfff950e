"""
community_hub.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Normalize list query strings into a `FilterQuery`.
- Encapsulate app.state access patterns (settings/engine/sessionmaker).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from community_hub.query.normalizer import FilterQuery, normalize_filters
from community_hub.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The app factory stores the settings it was built with; tests rely on that.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the app lifespan (`community_hub.api.app.create_app`).
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit is explicit in the service layer.
    async with session_factory() as session:
        yield session


def list_query(request: Request, settings: Settings = Depends(settings_dep)) -> FilterQuery:
    return normalize_filters(
        request.query_params,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
