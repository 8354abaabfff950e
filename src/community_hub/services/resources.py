"""
community_hub.services.resources

Generic role-scoped CRUD service (transaction owner).

Responsibilities:
- Run every operation through the resource's `AccessFilter`.
- Validate foreign-key references before writing.
- Commit writes and log mutations with the acting principal.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic

from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.access.filter import AccessFilter
from community_hub.access.policy import ResourcePolicy
from community_hub.auth.models import Principal
from community_hub.db.repositories.base import ModelT, Page, ResourceRepo
from community_hub.errors import ValidationFailed
from community_hub.observability.logging import get_logger
from community_hub.query.normalizer import FilterQuery

log = get_logger(__name__)


class ResourceService(Generic[ModelT]):
    def __init__(
        self,
        *,
        session: AsyncSession,
        repo: ResourceRepo[ModelT],
        policy: ResourcePolicy,
        principal: Principal,
    ) -> None:
        self._session = session
        self._repo = repo
        self._policy = policy
        self._principal = principal
        self._access = AccessFilter(policy)

    async def list(self, query: FilterQuery) -> Page[ModelT]:
        scope = self._access.list_scope(self._principal)
        return await self._repo.list(query, scope=scope)

    async def get(self, row_id: int) -> ModelT:
        row = await self._repo.get(row_id)
        return self._access.check_read(self._principal, row)

    async def create(self, values: Mapping[str, Any]) -> ModelT:
        allowed = self._access.check_create(self._principal, values)
        allowed = await self._prepare(allowed, row=None)
        await self._check_references(allowed)

        row = await self._repo.create(allowed)
        await self._session.commit()
        log.info(
            "resource_created",
            resource=self._policy.name,
            id=row.id,  # type: ignore[attr-defined]
            actor=self._principal.id,
        )
        return row

    async def update(self, row_id: int, changes: Mapping[str, Any]) -> ModelT:
        row = await self._repo.get(row_id)
        allowed = self._access.restrict_update(self._principal, row, changes)
        if not allowed:
            # Everything in the payload was outside the caller's allow-list.
            return row  # type: ignore[return-value]

        allowed = await self._prepare(allowed, row=row)
        await self._check_references(allowed)
        updated = await self._repo.update(row, allowed)  # type: ignore[arg-type]
        await self._session.commit()
        log.info(
            "resource_updated",
            resource=self._policy.name,
            id=row_id,
            actor=self._principal.id,
            fields=sorted(allowed),
        )
        return updated

    async def delete(self, row_id: int) -> None:
        row = await self._repo.get(row_id)
        self._access.check_delete(self._principal, row)
        await self._repo.delete(row)  # type: ignore[arg-type]
        await self._session.commit()
        log.info(
            "resource_deleted",
            resource=self._policy.name,
            id=row_id,
            actor=self._principal.id,
        )

    async def _prepare(self, values: dict[str, Any], *, row: ModelT | None) -> dict[str, Any]:
        # Hook for resource-specific value shaping (e.g. password hashing).
        return values

    async def _check_references(self, values: Mapping[str, Any]) -> None:
        errors = await self._repo.missing_references(values)
        if errors:
            raise ValidationFailed(errors)


# --- Module Notes -----------------------------------------------------------
# Routers build one service per request with the resolved principal; the
# service never looks the caller up on its own.
