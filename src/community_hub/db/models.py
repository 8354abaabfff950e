"""
community_hub.db.models

Persistence schema for the community service.

Responsibilities:
- Define ORM models for the shared resources (Residence, Amenity, Activity),
  the owned resources (Report, Payment) and user accounts.
- Define the stored enumerations (statuses, types, priorities).
"""

from __future__ import annotations

import datetime as dt
import enum
from datetime import UTC, date, datetime, time
from decimal import Decimal

from sqlalchemy import Date, Enum, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from community_hub.auth.models import Role
from community_hub.db.base import Base


def _utcnow() -> datetime:
    # Persist naive UTC timestamps; SQLite has no timezone-aware column type.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class ResidenceStatus(enum.StrEnum):
    available = "AVAILABLE"
    occupied = "OCCUPIED"
    maintenance = "MAINTENANCE"


class ReportStatus(enum.StrEnum):
    # PENDING -> IN_PROGRESS -> RESOLVED -> CLOSED, with REJECTED as a terminal exit.
    pending = "PENDING"
    in_progress = "IN_PROGRESS"
    resolved = "RESOLVED"
    closed = "CLOSED"
    rejected = "REJECTED"


class ReportPriority(enum.StrEnum):
    low = "LOW"
    medium = "MEDIUM"
    high = "HIGH"
    urgent = "URGENT"


class PaymentStatus(enum.StrEnum):
    pending = "PENDING"
    paid = "PAID"
    overdue = "OVERDUE"
    cancelled = "CANCELLED"


class PaymentType(enum.StrEnum):
    rent = "RENT"
    maintenance = "MAINTENANCE"
    service = "SERVICE"
    other = "OTHER"


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class Residence(TimestampMixin, Base):
    __tablename__ = "residences"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    floor: Mapped[int] = mapped_column(nullable=False)
    apartment_number: Mapped[str] = mapped_column(String(20), nullable=False)
    square_meters: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    bedrooms: Mapped[int] = mapped_column(nullable=False)
    bathrooms: Mapped[int] = mapped_column(nullable=False)
    status: Mapped[ResidenceStatus] = mapped_column(
        Enum(ResidenceStatus), nullable=False, default=ResidenceStatus.available, index=True
    )
    monthly_rent: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # passive_deletes: the database applies ON DELETE rules, so deletes never lazy-load children.
    residents: Mapped[list[User]] = relationship(
        back_populates="residence", passive_deletes=True
    )


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role), nullable=False, default=Role.resident)
    residence_id: Mapped[int | None] = mapped_column(
        ForeignKey("residences.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)

    residence: Mapped[Residence | None] = relationship(back_populates="residents")


class Amenity(TimestampMixin, Base):
    __tablename__ = "amenities"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    capacity: Mapped[int | None] = mapped_column(nullable=True)
    is_available: Mapped[bool] = mapped_column(nullable=False, default=True, index=True)
    opening_time: Mapped[time | None] = mapped_column(nullable=True)
    closing_time: Mapped[time | None] = mapped_column(nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)


class Activity(TimestampMixin, Base):
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(nullable=False)
    end_time: Mapped[time] = mapped_column(nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    capacity: Mapped[int | None] = mapped_column(nullable=True)
    available_spots: Mapped[int | None] = mapped_column(nullable=True)
    is_active: Mapped[bool] = mapped_column(nullable=False, default=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (Index("ix_activities_date_start", "date", "start_time"),)


class Report(TimestampMixin, Base):
    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    residence_id: Mapped[int | None] = mapped_column(
        ForeignKey("residences.id", ondelete="SET NULL"), nullable=True, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[ReportStatus] = mapped_column(
        Enum(ReportStatus), nullable=False, default=ReportStatus.pending, index=True
    )
    priority: Mapped[ReportPriority] = mapped_column(
        Enum(ReportPriority), nullable=False, default=ReportPriority.medium
    )
    response_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped[User] = relationship()
    residence: Mapped[Residence | None] = relationship()

    __table_args__ = (Index("ix_reports_user_created", "user_id", "created_at"),)


class Payment(TimestampMixin, Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    residence_id: Mapped[int] = mapped_column(
        ForeignKey("residences.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    type: Mapped[PaymentType] = mapped_column(Enum(PaymentType), nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus), nullable=False, default=PaymentStatus.pending, index=True
    )
    due_date: Mapped[date] = mapped_column(nullable=False)
    payment_date: Mapped[datetime | None] = mapped_column(nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    transaction_id: Mapped[str | None] = mapped_column(String(200), nullable=True)

    user: Mapped[User] = relationship()
    residence: Mapped[Residence] = relationship()

    __table_args__ = (Index("ix_payments_user_due", "user_id", "due_date"),)


# --- Module Notes -----------------------------------------------------------
# Enum values are stored in the database and exposed on the wire; treat them as
# a stable API contract.
