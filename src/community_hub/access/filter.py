"""
community_hub.access.filter

Role-scoped access filter.

Responsibilities:
- Compute the list predicate for a principal (own rows for residents on owned resources).
- Reject reads/writes/deletes on missing rows (NotFound) or foreign rows (Forbidden).
- Reduce resident update payloads to the policy's allow-list and status moves.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from community_hub.access.policy import ResourcePolicy
from community_hub.auth.models import Principal
from community_hub.errors import Forbidden, NotFound
from community_hub.observability.logging import get_logger

log = get_logger(__name__)


class AccessFilter:
    def __init__(self, policy: ResourcePolicy) -> None:
        self._policy = policy

    @property
    def policy(self) -> ResourcePolicy:
        return self._policy

    def list_scope(self, principal: Principal) -> dict[str, Any]:
        if principal.is_admin:
            return {}
        if not self._policy.resident_read:
            raise Forbidden()
        if self._policy.owner_field is not None:
            return {self._policy.owner_field: principal.id}
        return {}

    def check_read(self, principal: Principal, row: Any | None) -> Any:
        if row is None:
            raise NotFound(f"{self._policy.label} not found")
        if principal.is_admin:
            return row
        if not self._policy.resident_read or not self._owns(principal, row):
            raise Forbidden()
        return row

    def check_create(self, principal: Principal, values: Mapping[str, Any]) -> dict[str, Any]:
        if not principal.is_admin and not self._policy.resident_create:
            raise Forbidden()
        allowed = dict(values)
        owner_field = self._policy.owner_field
        if owner_field is not None and (self._policy.owner_from_principal or not principal.is_admin):
            allowed[owner_field] = principal.id
        return allowed

    def restrict_update(
        self,
        principal: Principal,
        row: Any | None,
        changes: Mapping[str, Any],
    ) -> dict[str, Any]:
        self.check_read(principal, row)
        if principal.is_admin:
            allowed = dict(changes)
        else:
            allowed = self._resident_changes(row, changes)
        self._stamp_status(row, allowed)
        return allowed

    def check_delete(self, principal: Principal, row: Any | None) -> Any:
        self.check_read(principal, row)
        if principal.is_admin:
            return row
        statuses = self._policy.resident_delete_statuses
        if statuses is None or _value(getattr(row, self._policy.status_field)) not in statuses:
            raise Forbidden()
        return row

    def _owns(self, principal: Principal, row: Any) -> bool:
        owner_field = self._policy.owner_field
        return owner_field is None or getattr(row, owner_field) == principal.id

    def _resident_changes(self, row: Any, changes: Mapping[str, Any]) -> dict[str, Any]:
        policy = self._policy
        if not policy.resident_update_fields:
            raise Forbidden()

        allowed = {k: v for k, v in changes.items() if k in policy.resident_update_fields}
        dropped = sorted(set(changes) - set(allowed))
        if dropped:
            log.info("resident_fields_dropped", resource=policy.name, fields=dropped)

        if policy.resident_required_fields - allowed.keys():
            raise Forbidden(policy.transition_denied_message)

        if policy.status_field in allowed:
            current = _value(getattr(row, policy.status_field))
            target = _value(allowed[policy.status_field])
            if target not in policy.resident_transitions.get(current, frozenset()):
                raise Forbidden(policy.transition_denied_message)
        return allowed

    def _stamp_status(self, row: Any, allowed: dict[str, Any]) -> None:
        target = allowed.get(self._policy.status_field)
        if target is None:
            return
        stamp_field = self._policy.status_timestamps.get(_value(target))
        if stamp_field is None or stamp_field in allowed:
            return
        if getattr(row, stamp_field) is None:
            allowed[stamp_field] = datetime.now(tz=UTC).replace(tzinfo=None)


def _value(status: Any) -> str:
    return str(getattr(status, "value", status))


# --- Module Notes -----------------------------------------------------------
# Admins bypass ownership, allow-lists and status checks; only the timestamp
# stamping applies to both roles.
