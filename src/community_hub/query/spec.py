"""
community_hub.query.spec

Per-resource list specification.

Responsibilities:
- Declare which wire keys a resource can be searched, filtered, date-ranged and sorted by.
- Compile a normalized `FilterQuery` into SQLAlchemy predicates and ordering.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any

from sqlalchemy import DateTime, or_
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement

from community_hub.errors import ValidationFailed
from community_hub.query.normalizer import MAX_DB_INT, FilterQuery

Parser = Callable[[Any], Any]

_TRUE = frozenset({"true", "1", "yes"})
_FALSE = frozenset({"false", "0", "no"})


def parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("Must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError("Must be an integer") from e
    if not -MAX_DB_INT - 1 <= number <= MAX_DB_INT:
        raise ValueError("Must be an integer")
    return number


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError("Must be a boolean")


def parse_enum(enum_cls: type[enum.Enum]) -> Parser:
    def _parse(value: Any) -> enum.Enum:
        try:
            return enum_cls(str(value).upper())
        except ValueError as e:
            allowed = ", ".join(str(m.value) for m in enum_cls)
            raise ValueError(f"Must be one of: {allowed}") from e

    return _parse


def parse_day(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise ValueError("Must be a date (YYYY-MM-DD)") from e


@dataclass(frozen=True, slots=True)
class FilterField:
    column: InstrumentedAttribute[Any]
    parse: Parser = str


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    where: list[ColumnElement[bool]]
    order_by: list[ColumnElement[Any]]


@dataclass(frozen=True, slots=True)
class ListSpec:
    search: tuple[InstrumentedAttribute[Any], ...] = ()
    filters: Mapping[str, FilterField] = field(default_factory=dict)
    date_column: InstrumentedAttribute[Any] | None = None
    sortable: Mapping[str, InstrumentedAttribute[Any]] = field(default_factory=dict)
    default_order: tuple[ColumnElement[Any], ...] = ()

    def compile(self, query: FilterQuery) -> CompiledQuery:
        errors: dict[str, str] = {}
        where: list[ColumnElement[bool]] = []
        order_by: list[ColumnElement[Any]] = []

        for key, value in query.applied_filters.items():
            if key == "search":
                if not self.search:
                    errors[key] = "Search is not supported for this resource"
                    continue
                pattern = f"%{_escape_like(str(value))}%"
                where.append(or_(*(col.ilike(pattern, escape="\\") for col in self.search)))
            elif key == "sort":
                try:
                    order_by.append(self._sort_clause(str(value)))
                except ValueError as e:
                    errors[key] = str(e)
            elif key in ("dateFrom", "dateTo"):
                if self.date_column is None:
                    errors[key] = "Date range is not supported for this resource"
                    continue
                try:
                    day = parse_day(value)
                except ValueError as e:
                    errors[key] = str(e)
                    continue
                where.append(self._date_bound(key, day))
            elif key in self.filters:
                spec = self.filters[key]
                try:
                    where.append(spec.column == spec.parse(value))
                except ValueError as e:
                    errors[key] = str(e)
            else:
                errors[key] = "Unknown filter"

        if errors:
            raise ValidationFailed(errors)
        order_by.extend(self.default_order)
        return CompiledQuery(where=where, order_by=order_by)

    def _sort_clause(self, value: str) -> ColumnElement[Any]:
        descending = value.startswith("-")
        name = value.lstrip("-")
        column = self.sortable.get(name)
        if column is None:
            allowed = ", ".join(sorted(self.sortable)) or "none"
            raise ValueError(f"Cannot sort by '{name}'. Sortable fields: {allowed}")
        return column.desc() if descending else column.asc()

    def _date_bound(self, key: str, day: date) -> ColumnElement[bool]:
        column = self.date_column
        assert column is not None
        if isinstance(column.expression.type, DateTime):
            # Timestamp columns: the whole calendar day is inclusive.
            if key == "dateFrom":
                return column >= datetime.combine(day, time.min)
            return column < datetime.combine(day + timedelta(days=1), time.min)
        if key == "dateFrom":
            return column >= day
        return column <= day


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# --- Module Notes -----------------------------------------------------------
# Wire keys (camelCase) are the contract; column names stay private to the repos.
