from __future__ import annotations

from datetime import date

from community_hub.db.models import Activity
from community_hub.db.repositories.base import ResourceRepo
from community_hub.query.spec import FilterField, ListSpec, parse_bool


class ActivityRepo(ResourceRepo[Activity]):
    model = Activity
    list_spec = ListSpec(
        search=(Activity.title, Activity.description, Activity.location),
        filters={
            "isActive": FilterField(Activity.is_active, parse_bool),
            "location": FilterField(Activity.location),
        },
        date_column=Activity.date,
        sortable={
            "date": Activity.date,
            "title": Activity.title,
            "createdAt": Activity.created_at,
        },
        default_order=(Activity.date.desc(), Activity.start_time.desc(), Activity.id.desc()),
    )

    async def upcoming(self, *, today: date) -> list[Activity]:
        # Soonest first, unlike the default listing.
        return await self.find(
            Activity.date >= today,
            Activity.is_active.is_(True),
            order_by=(Activity.date.asc(), Activity.start_time.asc(), Activity.id.asc()),
        )
