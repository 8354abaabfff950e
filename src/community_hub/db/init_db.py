"""
community_hub.db.init_db

Schema bootstrap for dev/test databases.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from community_hub.db import models  # noqa: F401  # registers every table on Base.metadata
from community_hub.db.base import Base
from community_hub.observability.logging import get_logger

log = get_logger(__name__)


async def init_db(engine: AsyncEngine) -> None:
    """Create missing tables; existing tables and rows are left untouched."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("schema_ready", tables=sorted(Base.metadata.tables))
