from __future__ import annotations

from sqlalchemy.orm import selectinload

from community_hub.db.models import Residence, ResidenceStatus
from community_hub.db.repositories.base import ResourceRepo
from community_hub.query.spec import FilterField, ListSpec, parse_enum, parse_int


class ResidenceRepo(ResourceRepo[Residence]):
    model = Residence
    list_spec = ListSpec(
        search=(Residence.name, Residence.address, Residence.apartment_number),
        filters={
            "status": FilterField(Residence.status, parse_enum(ResidenceStatus)),
            "floor": FilterField(Residence.floor, parse_int),
            "bedrooms": FilterField(Residence.bedrooms, parse_int),
        },
        sortable={
            "name": Residence.name,
            "floor": Residence.floor,
            "monthlyRent": Residence.monthly_rent,
        },
        default_order=(Residence.id.asc(),),
    )
    load_options = (selectinload(Residence.residents),)

    async def available(self) -> list[Residence]:
        return await self.find(
            Residence.status == ResidenceStatus.available, order_by=(Residence.id.asc(),)
        )
