"""
community_hub.client.forms

Create/edit form orchestration for one resource.

Responsibilities:
- Start blank (create mode) or from the stored entity (edit mode).
- Validate with the same pydantic schemas the API uses, as `{field: message}`.
- Submit the full payload on create and only the changed fields on edit.
- Map server field errors back onto the form and report the outcome.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from community_hub.api.schemas.common import flatten_errors
from community_hub.client.api import ApiError, CommunityApiClient
from community_hub.client.listing import Notifier
from community_hub.observability.logging import get_logger

log = get_logger(__name__)


class ResourceForm:
    def __init__(
        self,
        *,
        client: CommunityApiClient,
        resource: str,
        create_schema: type[BaseModel],
        update_schema: type[BaseModel],
        entity_id: int | None = None,
        label: str | None = None,
        notify: Notifier | None = None,
        on_success: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        self._client = client
        self._resource = resource
        self._create_schema = create_schema
        self._update_schema = update_schema
        self._entity_id = entity_id
        self._label = label or resource.rstrip("s").capitalize()
        self._notify = notify
        self._on_success = on_success

        self.initial: dict[str, Any] = {}
        self.values: dict[str, Any] = {}
        self.errors: dict[str, str] = {}
        self.saving = False

    @property
    def is_edit(self) -> bool:
        return self._entity_id is not None

    @property
    def entity_id(self) -> int | None:
        return self._entity_id

    @property
    def schema(self) -> type[BaseModel]:
        return self._update_schema if self.is_edit else self._create_schema

    async def load(self) -> None:
        if not self.is_edit:
            self.initial = {}
            self.values = {}
            return
        entity = await self._client.get(self._resource, self._entity_id)  # type: ignore[arg-type]
        editable = _wire_fields(self._update_schema)
        self.initial = {k: v for k, v in entity.items() if k in editable}
        self.values = dict(self.initial)
        self.errors = {}

    def set(self, field: str, value: Any) -> None:
        self.values[field] = value
        self.errors.pop(field, None)

    def update(self, values: Mapping[str, Any]) -> None:
        for field, value in values.items():
            self.set(field, value)

    def changes(self) -> dict[str, Any]:
        if not self.is_edit:
            return {k: v for k, v in self.values.items() if v is not None}
        return {k: v for k, v in self.values.items() if self.initial.get(k, _MISSING) != v}

    def validate(self) -> dict[str, str]:
        try:
            self.schema.model_validate(self.changes())
        except ValidationError as e:
            self.errors = flatten_errors(e.errors())
        else:
            self.errors = {}
        return dict(self.errors)

    async def submit(self) -> dict[str, Any] | None:
        if self.validate():
            self._emit("error", "Please correct the highlighted fields")
            return None

        payload = self.schema.model_validate(self.changes()).model_dump(
            mode="json", by_alias=True, exclude_unset=True
        )
        if self.is_edit and not payload:
            self._emit("info", "No changes to save")
            return None

        self.saving = True
        try:
            if self.is_edit:
                saved = await self._client.update(self._resource, self._entity_id, payload)  # type: ignore[arg-type]
            else:
                saved = await self._client.create(self._resource, payload)
        except ApiError as e:
            self.errors = dict(e.errors)
            log.warning("form_submit_failed", resource=self._resource, status=e.status_code)
            self._emit("error", e.message)
            return None
        finally:
            self.saving = False

        self._emit("success", f"{self._label} {'updated' if self.is_edit else 'created'}")
        if self.is_edit:
            editable = _wire_fields(self._update_schema)
            self.initial = {k: v for k, v in saved.items() if k in editable}
            self.values = dict(self.initial)
        if self._on_success is not None:
            self._on_success(saved)
        return saved

    def _emit(self, level: str, message: str) -> None:
        if self._notify is not None:
            self._notify(level, message)


_MISSING = object()


def _wire_fields(schema: type[BaseModel]) -> set[str]:
    return {info.alias or name for name, info in schema.model_fields.items()}
