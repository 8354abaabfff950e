from __future__ import annotations

import datetime as dt

from pydantic import Field, model_validator

from community_hub.api.schemas.common import InputModel, TimestampedOut
from community_hub.query.normalizer import MAX_DB_INT


class ActivityCreate(InputModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    location: str = Field(min_length=1, max_length=255)
    capacity: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    available_spots: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    is_active: bool = True
    image_url: str | None = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def check_time_window(self) -> ActivityCreate:
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class ActivityUpdate(InputModel):
    title: str = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    date: dt.date = Field(default=None)
    start_time: dt.time = Field(default=None)
    end_time: dt.time = Field(default=None)
    location: str = Field(default=None, min_length=1, max_length=255)
    capacity: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    available_spots: int | None = Field(default=None, ge=0, le=MAX_DB_INT)
    is_active: bool = Field(default=None)
    image_url: str | None = Field(default=None, max_length=500)


class ActivityOut(TimestampedOut):
    id: int
    title: str
    description: str | None = None
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    location: str
    capacity: int | None = None
    available_spots: int | None = None
    is_active: bool
    image_url: str | None = None
