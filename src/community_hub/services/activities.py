"""
community_hub.services.activities

Activity writes: the time window must stay ordered across partial updates.
"""

from __future__ import annotations

from typing import Any

from community_hub.db.models import Activity
from community_hub.errors import ValidationFailed
from community_hub.services.resources import ResourceService


class ActivityService(ResourceService[Activity]):
    async def _prepare(self, values: dict[str, Any], *, row: Activity | None) -> dict[str, Any]:
        # An update may move only one end; compare against the stored other end.
        start = values.get("start_time", getattr(row, "start_time", None))
        end = values.get("end_time", getattr(row, "end_time", None))
        if start is not None and end is not None and end <= start:
            raise ValidationFailed({"endTime": "endTime must be after startTime"})
        return values
