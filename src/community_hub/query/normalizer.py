"""
community_hub.query.normalizer

Pagination & filter normalizer.

Responsibilities:
- Turn a raw filter mapping (query string, form state) into a `FilterQuery`:
  positive page/limit and only the filters that actually carry a value.
- Render dates as `YYYY-MM-DD` from the value's own calendar fields.

The same code builds outgoing query strings in `community_hub.client` and parses
incoming ones in the API, so both sides agree on what "no filter" means.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Largest value a SQLite INTEGER column (signed 64-bit) holds.
MAX_DB_INT = 2**63 - 1

# Keys whose values are calendar days on the wire.
DATE_KEYS = frozenset({"dateFrom", "dateTo"})


@dataclass(frozen=True, slots=True)
class FilterQuery:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    applied_filters: dict[str, Any] = field(default_factory=dict)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def search(self) -> str | None:
        return self.applied_filters.get("search")

    @property
    def sort(self) -> str | None:
        return self.applied_filters.get("sort")

    def to_params(self) -> dict[str, str]:
        params = {"page": str(self.page), "limit": str(self.limit)}
        for key, value in self.applied_filters.items():
            params[key] = _param_value(value)
        return params


def format_local_date(value: date | datetime) -> str:
    """
    `YYYY-MM-DD` from the value's calendar fields.

    Aware datetimes are not converted to UTC first: 2025-12-05T23:30-05:00 is
    still the 5th for the person who picked it.
    """

    if isinstance(value, datetime):
        value = value.date()
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def normalize_filters(
    raw: Mapping[str, Any] | None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> FilterQuery:
    values = dict(raw or {})
    page = _positive_int(values.pop("page", None), default=DEFAULT_PAGE)
    limit = min(_positive_int(values.pop("limit", None), default=default_limit), max_limit)
    # The row offset has to fit in an INTEGER too.
    page = min(page, MAX_DB_INT // limit + 1)

    applied: dict[str, Any] = {}
    for key, value in values.items():
        cleaned = _clean(key, value)
        if cleaned is not None:
            applied[key] = cleaned
    return FilterQuery(page=page, limit=limit, applied_filters=applied)


def _positive_int(value: Any, *, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value) if isinstance(value, int) else int(str(value).strip())
    except ValueError:
        return default
    return number if number >= 1 else default


def _clean(key: str, value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return format_local_date(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if key in DATE_KEYS:
            return _normalize_date_text(value)
    return value


def _normalize_date_text(text: str) -> str:
    try:
        return format_local_date(date.fromisoformat(text))
    except ValueError:
        pass
    try:
        return format_local_date(datetime.fromisoformat(text))
    except ValueError:
        # Left as-is; `ListSpec.compile` reports it as a field error.
        return text


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# --- Module Notes -----------------------------------------------------------
# Empty strings and None never reach `applied_filters`; a cleared form field
# means "no constraint", not "match the empty string".
