from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import Field

from community_hub.api.schemas.common import (
    InputModel,
    ResidenceSummary,
    TimestampedOut,
    UserSummary,
)
from community_hub.db.models import PaymentStatus, PaymentType
from community_hub.query.normalizer import MAX_DB_INT


class PaymentCreate(InputModel):
    user_id: int = Field(le=MAX_DB_INT)
    residence_id: int = Field(le=MAX_DB_INT)
    amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    type: PaymentType
    status: PaymentStatus = PaymentStatus.pending
    due_date: date
    payment_date: datetime | None = None
    description: str | None = None
    transaction_id: str | None = Field(default=None, min_length=1, max_length=200)


class PaymentUpdate(InputModel):
    user_id: int = Field(default=None, le=MAX_DB_INT)
    residence_id: int = Field(default=None, le=MAX_DB_INT)
    amount: Decimal = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    type: PaymentType = Field(default=None)
    status: PaymentStatus = Field(default=None)
    due_date: date = Field(default=None)
    payment_date: datetime | None = None
    description: str | None = None
    transaction_id: str = Field(default=None, min_length=1, max_length=200)


class PaymentOut(TimestampedOut):
    id: int
    user_id: int
    residence_id: int
    amount: Decimal
    type: PaymentType
    status: PaymentStatus
    due_date: date
    payment_date: datetime | None = None
    description: str | None = None
    transaction_id: str | None = None
    user: UserSummary | None = None
    residence: ResidenceSummary | None = None
