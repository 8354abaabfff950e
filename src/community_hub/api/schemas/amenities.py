from __future__ import annotations

from datetime import time

from pydantic import Field

from community_hub.api.schemas.common import InputModel, TimestampedOut
from community_hub.query.normalizer import MAX_DB_INT


class AmenityCreate(InputModel):
    name: str = Field(min_length=1, max_length=150)
    description: str | None = None
    location: str = Field(min_length=1, max_length=255)
    capacity: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    is_available: bool = True
    opening_time: time | None = None
    closing_time: time | None = None
    image_url: str | None = Field(default=None, max_length=500)


class AmenityUpdate(InputModel):
    name: str = Field(default=None, min_length=1, max_length=150)
    description: str | None = None
    location: str = Field(default=None, min_length=1, max_length=255)
    capacity: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    is_available: bool = Field(default=None)
    opening_time: time | None = None
    closing_time: time | None = None
    image_url: str | None = Field(default=None, max_length=500)


class AmenityOut(TimestampedOut):
    id: int
    name: str
    description: str | None = None
    location: str
    capacity: int | None = None
    is_available: bool
    opening_time: time | None = None
    closing_time: time | None = None
    image_url: str | None = None
