"""
community_hub.access.policy

Declarative access policy table: resource -> what residents may do.

Admins are unrestricted on every resource; each `ResourcePolicy` only
describes the resident side. Field names are ORM attribute names.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from community_hub.db.models import PaymentStatus, ReportStatus


@dataclass(frozen=True, slots=True)
class ResourcePolicy:
    name: str
    label: str
    # Attribute holding the owning user id; None for shared resources.
    owner_field: str | None = None
    # Owner is always the caller on create, whatever the role.
    owner_from_principal: bool = False

    resident_read: bool = True
    resident_create: bool = False
    # Fields a resident update may carry; anything else is dropped.
    resident_update_fields: frozenset[str] = frozenset()
    # Fields a resident update must carry to be accepted at all.
    resident_required_fields: frozenset[str] = frozenset()
    # Allowed resident status moves: current status -> permitted targets.
    resident_transitions: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    # Statuses in which a resident may delete their own row; None = never.
    resident_delete_statuses: frozenset[str] | None = None
    transition_denied_message: str = "Access denied"

    status_field: str = "status"
    # Entering a status stamps this timestamp field when the caller did not set it.
    status_timestamps: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_owned(self) -> bool:
        return self.owner_field is not None


POLICIES: Mapping[str, ResourcePolicy] = MappingProxyType(
    {
        "activities": ResourcePolicy(name="activities", label="Activity"),
        "amenities": ResourcePolicy(name="amenities", label="Amenity"),
        "residences": ResourcePolicy(name="residences", label="Residence"),
        "users": ResourcePolicy(name="users", label="User", resident_read=False),
        "reports": ResourcePolicy(
            name="reports",
            label="Report",
            owner_field="user_id",
            owner_from_principal=True,
            resident_create=True,
            resident_update_fields=frozenset({"description"}),
            resident_delete_statuses=frozenset({ReportStatus.pending.value}),
        ),
        "payments": ResourcePolicy(
            name="payments",
            label="Payment",
            owner_field="user_id",
            resident_update_fields=frozenset({"status", "transaction_id"}),
            resident_required_fields=frozenset({"status"}),
            resident_transitions=MappingProxyType(
                {PaymentStatus.pending.value: frozenset({PaymentStatus.paid.value})}
            ),
            transition_denied_message="You can only mark payments as paid",
            status_timestamps=MappingProxyType({PaymentStatus.paid.value: "payment_date"}),
        ),
    }
)


# --- Module Notes -----------------------------------------------------------
# Adding a resource means adding a row here; `AccessFilter` has no per-resource branches.
