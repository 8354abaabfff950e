"""
community_hub.api.schemas.common

Shared base models, list envelope and nested summaries.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from community_hub.auth.models import Role
from community_hub.db.models import ResidenceStatus
from community_hub.db.repositories.base import Page


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class InputModel(BaseModel):
    """
    Base for request bodies.

    Update models declare non-nullable fields as `x: T = Field(default=None)`:
    omitting the key leaves the column alone, sending null is a validation error.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    def to_values(self) -> dict[str, Any]:
        # Only keys the caller actually sent; partial updates depend on this.
        return self.model_dump(exclude_unset=True)


class RoleStrippedInput(InputModel):
    """Self-service bodies: a `role` key is discarded instead of applied."""

    @model_validator(mode="before")
    @classmethod
    def drop_role(cls, data: Any) -> Any:
        if isinstance(data, dict) and "role" in data:
            return {k: v for k, v in data.items() if k != "role"}
        return data


def normalize_email(value: str | None) -> str | None:
    return value.strip().lower() if isinstance(value, str) else value


class TimestampedOut(ApiModel):
    created_at: datetime
    updated_at: datetime


class UserSummary(ApiModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    role: Role
    residence_id: int | None = None


class ResidenceSummary(ApiModel):
    id: int
    name: str
    apartment_number: str
    floor: int
    status: ResidenceStatus


ItemT = TypeVar("ItemT", bound=BaseModel)


class ListResponse(ApiModel, Generic[ItemT]):
    data: list[ItemT]
    total: int
    page: int
    limit: int


def to_list_response(page: Page[Any], item_model: type[ItemT]) -> ListResponse[ItemT]:
    validate: Callable[[Any], ItemT] = item_model.model_validate
    return ListResponse[item_model](  # type: ignore[valid-type]
        data=[validate(row) for row in page.items],
        total=page.total,
        page=page.page,
        limit=page.limit,
    )


_VALUE_ERROR_PREFIX = "Value error, "


def flatten_errors(details: Sequence[Mapping[str, Any]], *, skip_loc: int = 0) -> dict[str, str]:
    """
    Flatten pydantic error details into `{field: message}` keyed by wire name.

    `skip_loc` drops leading `loc` parts (FastAPI prefixes body/query/path).
    Model-level errors have no field left and are keyed as `body`.
    """

    errors: dict[str, str] = {}
    for detail in details:
        loc = [str(part) for part in tuple(detail.get("loc", ()))[skip_loc:]]
        key = ".".join(loc) or "body"
        msg = str(detail.get("msg", "Invalid value"))
        if msg.startswith(_VALUE_ERROR_PREFIX):
            msg = msg[len(_VALUE_ERROR_PREFIX) :]
        # First message per field wins.
        errors.setdefault(key, msg)
    return errors
