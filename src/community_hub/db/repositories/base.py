"""
community_hub.db.repositories.base

Generic repository for list/get/create/update/delete of one ORM model.

Responsibilities:
- Apply an ownership scope plus the resource's `ListSpec` to list queries.
- Page results and count the total under the same predicates.
- Eager-load relationships so async callers never trigger lazy loads.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from pydantic.alias_generators import to_camel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption
from sqlalchemy.sql.elements import ColumnElement

from community_hub.db.base import Base
from community_hub.query.normalizer import MAX_DB_INT, FilterQuery
from community_hub.query.spec import ListSpec

ModelT = TypeVar("ModelT", bound=Base)


@dataclass(frozen=True, slots=True)
class Page(Generic[ModelT]):
    items: list[ModelT]
    total: int
    page: int
    limit: int


class ResourceRepo(Generic[ModelT]):
    model: ClassVar[type[Any]]
    list_spec: ClassVar[ListSpec] = ListSpec()
    load_options: ClassVar[tuple[ORMOption, ...]] = ()
    # Foreign-key attribute -> referenced model, checked before writes.
    references: ClassVar[Mapping[str, type[Base]]] = {}

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _select(self) -> Select[Any]:
        return select(self.model).options(*self.load_options)

    def _scope(self, scope: Mapping[str, Any] | None) -> list[ColumnElement[bool]]:
        return [getattr(self.model, name) == value for name, value in (scope or {}).items()]

    async def get(self, row_id: int) -> ModelT | None:
        if not _storable_id(row_id):
            return None
        # populate_existing refreshes relationships on rows already in the identity map.
        stmt = (
            self._select()
            .where(self.model.id == row_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list(
        self,
        query: FilterQuery,
        *,
        scope: Mapping[str, Any] | None = None,
    ) -> Page[ModelT]:
        compiled = self.list_spec.compile(query)
        conditions = [*self._scope(scope), *compiled.where]

        count_stmt = select(func.count()).select_from(self.model).where(*conditions)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            self._select()
            .where(*conditions)
            .order_by(*compiled.order_by)
            .offset(query.offset)
            .limit(query.limit)
        )
        items = list((await self._session.execute(stmt)).scalars().all())
        return Page(items=items, total=int(total), page=query.page, limit=query.limit)

    async def find(
        self,
        *conditions: ColumnElement[bool],
        order_by: Sequence[ColumnElement[Any]] = (),
    ) -> list[ModelT]:
        stmt = self._select().where(*conditions).order_by(*order_by)
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(self, values: Mapping[str, Any]) -> ModelT:
        row = self.model(**values)
        self._session.add(row)
        await self._session.flush()
        created = await self.get(row.id)
        assert created is not None
        return created

    async def update(self, row: ModelT, values: Mapping[str, Any]) -> ModelT:
        for name, value in values.items():
            setattr(row, name, value)
        await self._session.flush()
        updated = await self.get(row.id)  # type: ignore[attr-defined]
        assert updated is not None
        return updated

    async def delete(self, row: ModelT) -> None:
        await self._session.delete(row)
        await self._session.flush()

    async def missing_references(self, values: Mapping[str, Any]) -> dict[str, str]:
        errors: dict[str, str] = {}
        for name, target in self.references.items():
            ref_id = values.get(name)
            if ref_id is None:
                continue
            if not _storable_id(ref_id) or await self._session.get(target, ref_id) is None:
                errors[to_camel(name)] = f"{target.__name__} {ref_id} does not exist"
        return errors


def _storable_id(value: Any) -> bool:
    # Ids beyond the INTEGER range cannot exist; SQLite would reject the parameter.
    return isinstance(value, int) and -MAX_DB_INT - 1 <= value <= MAX_DB_INT


# --- Module Notes -----------------------------------------------------------
# Repositories never commit; the service layer owns the transaction boundary.
