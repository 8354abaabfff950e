from __future__ import annotations

from pydantic import Field

from community_hub.api.schemas.common import (
    InputModel,
    ResidenceSummary,
    TimestampedOut,
    UserSummary,
)
from community_hub.db.models import ReportPriority, ReportStatus
from community_hub.query.normalizer import MAX_DB_INT


class ReportCreate(InputModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1, max_length=100)
    priority: ReportPriority = ReportPriority.medium
    residence_id: int | None = Field(default=None, le=MAX_DB_INT)


class ReportUpdate(InputModel):
    title: str = Field(default=None, min_length=1, max_length=200)
    description: str = Field(default=None, min_length=1)
    category: str = Field(default=None, min_length=1, max_length=100)
    status: ReportStatus = Field(default=None)
    priority: ReportPriority = Field(default=None)
    response_message: str | None = None
    residence_id: int | None = Field(default=None, le=MAX_DB_INT)


class ReportOut(TimestampedOut):
    id: int
    user_id: int
    residence_id: int | None = None
    title: str
    description: str
    category: str
    status: ReportStatus
    priority: ReportPriority
    response_message: str | None = None
    user: UserSummary | None = None
    residence: ResidenceSummary | None = None
