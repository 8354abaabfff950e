from __future__ import annotations

from community_hub.db.models import Amenity
from community_hub.db.repositories.base import ResourceRepo
from community_hub.query.spec import FilterField, ListSpec, parse_bool


class AmenityRepo(ResourceRepo[Amenity]):
    model = Amenity
    list_spec = ListSpec(
        search=(Amenity.name, Amenity.description, Amenity.location),
        filters={"isAvailable": FilterField(Amenity.is_available, parse_bool)},
        sortable={"name": Amenity.name, "capacity": Amenity.capacity},
        default_order=(Amenity.id.asc(),),
    )

    async def available(self) -> list[Amenity]:
        return await self.find(Amenity.is_available.is_(True), order_by=(Amenity.id.asc(),))
