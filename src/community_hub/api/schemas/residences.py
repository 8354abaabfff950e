from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from community_hub.api.schemas.common import InputModel, TimestampedOut, UserSummary
from community_hub.db.models import ResidenceStatus
from community_hub.query.normalizer import MAX_DB_INT


class ResidenceCreate(InputModel):
    name: str = Field(min_length=1, max_length=150)
    address: str = Field(min_length=1, max_length=255)
    floor: int = Field(ge=-MAX_DB_INT - 1, le=MAX_DB_INT)
    apartment_number: str = Field(min_length=1, max_length=20)
    square_meters: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    bedrooms: int = Field(ge=0, le=MAX_DB_INT)
    bathrooms: int = Field(ge=0, le=MAX_DB_INT)
    status: ResidenceStatus = ResidenceStatus.available
    monthly_rent: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    description: str | None = None
    image_url: str | None = Field(default=None, max_length=500)


class ResidenceUpdate(InputModel):
    name: str = Field(default=None, min_length=1, max_length=150)
    address: str = Field(default=None, min_length=1, max_length=255)
    floor: int = Field(default=None, ge=-MAX_DB_INT - 1, le=MAX_DB_INT)
    apartment_number: str = Field(default=None, min_length=1, max_length=20)
    square_meters: Decimal = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    bedrooms: int = Field(default=None, ge=0, le=MAX_DB_INT)
    bathrooms: int = Field(default=None, ge=0, le=MAX_DB_INT)
    status: ResidenceStatus = Field(default=None)
    monthly_rent: Decimal = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    description: str | None = None
    image_url: str | None = Field(default=None, max_length=500)


class ResidenceOut(TimestampedOut):
    id: int
    name: str
    address: str
    floor: int
    apartment_number: str
    square_meters: Decimal
    bedrooms: int
    bathrooms: int
    status: ResidenceStatus
    monthly_rent: Decimal
    description: str | None = None
    image_url: str | None = None
    residents: list[UserSummary] = Field(default_factory=list)
