"""
tests.test_access_filter

Role-scoped access rules driven by the policy table.
"""

from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest

from community_hub.access import POLICIES, AccessFilter
from community_hub.auth.models import Principal, Role
from community_hub.db.models import PaymentStatus, ReportStatus
from community_hub.errors import Forbidden, NotFound

RESIDENT = Principal(id=7, email="res@example.com", role=Role.resident)
OTHER = Principal(id=8, email="other@example.com", role=Role.resident)
ADMIN = Principal(id=1, email="admin@example.com", role=Role.admin)

reports = AccessFilter(POLICIES["reports"])
payments = AccessFilter(POLICIES["payments"])
residences = AccessFilter(POLICIES["residences"])
users = AccessFilter(POLICIES["users"])


def _report(user_id: int = 7, status: ReportStatus = ReportStatus.pending) -> SimpleNamespace:
    return SimpleNamespace(id=1, user_id=user_id, status=status)


def _payment(user_id: int = 7, status: PaymentStatus = PaymentStatus.pending) -> SimpleNamespace:
    return SimpleNamespace(id=1, user_id=user_id, status=status, payment_date=None)


def test_list_scope() -> None:
    assert reports.list_scope(RESIDENT) == {"user_id": 7}
    assert payments.list_scope(RESIDENT) == {"user_id": 7}
    assert reports.list_scope(ADMIN) == {}
    assert residences.list_scope(RESIDENT) == {}
    with pytest.raises(Forbidden):
        users.list_scope(RESIDENT)


def test_check_read() -> None:
    with pytest.raises(NotFound, match="Report not found"):
        reports.check_read(RESIDENT, None)
    with pytest.raises(Forbidden):
        reports.check_read(OTHER, _report(user_id=7))
    row = _report(user_id=7)
    assert reports.check_read(RESIDENT, row) is row
    assert reports.check_read(ADMIN, row) is row


def test_check_create() -> None:
    assert reports.check_create(RESIDENT, {"title": "t"}) == {"title": "t", "user_id": 7}
    # Reports are always filed by the caller.
    assert reports.check_create(ADMIN, {"title": "t"})["user_id"] == 1
    # Payments are issued by admins for someone else.
    assert payments.check_create(ADMIN, {"user_id": 7}) == {"user_id": 7}
    with pytest.raises(Forbidden):
        payments.check_create(RESIDENT, {"user_id": 7})
    with pytest.raises(Forbidden):
        residences.check_create(RESIDENT, {"name": "x"})


def test_resident_payment_update_keeps_allow_list_and_stamps_date() -> None:
    allowed = payments.restrict_update(
        RESIDENT,
        _payment(),
        {"status": PaymentStatus.paid, "transaction_id": "TX1", "amount": 1, "user_id": 8},
    )
    assert set(allowed) == {"status", "transaction_id", "payment_date"}
    assert allowed["status"] is PaymentStatus.paid
    assert isinstance(allowed["payment_date"], datetime)


@pytest.mark.parametrize(
    ("current", "changes"),
    [
        (PaymentStatus.pending, {"status": PaymentStatus.cancelled}),
        (PaymentStatus.pending, {"transaction_id": "TX1"}),
        (PaymentStatus.paid, {"status": PaymentStatus.paid}),
        (PaymentStatus.overdue, {"status": PaymentStatus.paid}),
    ],
)
def test_resident_payment_moves_other_than_pending_to_paid_are_denied(current, changes) -> None:
    with pytest.raises(Forbidden, match="You can only mark payments as paid"):
        payments.restrict_update(RESIDENT, _payment(status=current), changes)


def test_resident_cannot_touch_foreign_rows() -> None:
    with pytest.raises(Forbidden):
        payments.restrict_update(OTHER, _payment(user_id=7), {"status": PaymentStatus.paid})
    with pytest.raises(Forbidden):
        reports.restrict_update(OTHER, _report(user_id=7), {"description": "x"})
    with pytest.raises(Forbidden):
        reports.check_delete(OTHER, _report(user_id=7))


def test_resident_report_update_drops_disallowed_fields() -> None:
    allowed = reports.restrict_update(
        RESIDENT, _report(), {"description": "new", "status": ReportStatus.closed, "title": "x"}
    )
    assert allowed == {"description": "new"}


def test_resident_cannot_update_shared_resources() -> None:
    with pytest.raises(Forbidden):
        residences.restrict_update(RESIDENT, SimpleNamespace(id=1), {"name": "x"})


def test_admin_update_passes_through() -> None:
    changes = {"status": PaymentStatus.cancelled, "amount": 10}
    assert payments.restrict_update(ADMIN, _payment(user_id=7), changes) == changes

    stamped = payments.restrict_update(ADMIN, _payment(), {"status": PaymentStatus.paid})
    assert "payment_date" in stamped


def test_explicit_payment_date_is_not_overwritten() -> None:
    when = datetime(2025, 12, 1, 10, 0)
    allowed = payments.restrict_update(
        ADMIN, _payment(), {"status": PaymentStatus.paid, "payment_date": when}
    )
    assert allowed["payment_date"] == when


def test_report_delete_rules() -> None:
    pending = _report(status=ReportStatus.pending)
    assert reports.check_delete(RESIDENT, pending) is pending
    with pytest.raises(Forbidden):
        reports.check_delete(RESIDENT, _report(status=ReportStatus.in_progress))
    resolved = _report(user_id=8, status=ReportStatus.resolved)
    assert reports.check_delete(ADMIN, resolved) is resolved
    with pytest.raises(Forbidden):
        payments.check_delete(RESIDENT, _payment())
    with pytest.raises(NotFound):
        reports.check_delete(ADMIN, None)
