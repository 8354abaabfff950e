"""
community_hub.api.routers.amenities

Amenities: readable by every authenticated user, managed by admins.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.access.policy import POLICIES
from community_hub.api.deps import db_session, list_query
from community_hub.api.schemas.amenities import AmenityCreate, AmenityOut, AmenityUpdate
from community_hub.api.schemas.common import ListResponse, to_list_response
from community_hub.auth.deps import get_principal, require_admin
from community_hub.auth.models import Principal
from community_hub.db.models import Amenity
from community_hub.db.repositories.amenities import AmenityRepo
from community_hub.query.normalizer import FilterQuery
from community_hub.services.resources import ResourceService

router = APIRouter(prefix="/api/amenities", tags=["amenities"])


def _service(session: AsyncSession, principal: Principal) -> ResourceService[Amenity]:
    return ResourceService(
        session=session,
        repo=AmenityRepo(session),
        policy=POLICIES["amenities"],
        principal=principal,
    )


@router.get("", response_model=ListResponse[AmenityOut])
async def list_amenities(
    query: FilterQuery = Depends(list_query),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ListResponse[AmenityOut]:
    page = await _service(session, principal).list(query)
    return to_list_response(page, AmenityOut)


@router.get("/available", response_model=list[AmenityOut])
async def list_available_amenities(
    _: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[AmenityOut]:
    return [AmenityOut.model_validate(r) for r in await AmenityRepo(session).available()]


@router.get("/{amenity_id}", response_model=AmenityOut)
async def get_amenity(
    amenity_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> AmenityOut:
    return AmenityOut.model_validate(await _service(session, principal).get(amenity_id))


@router.post("", response_model=AmenityOut, status_code=status.HTTP_201_CREATED)
async def create_amenity(
    body: AmenityCreate,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> AmenityOut:
    return AmenityOut.model_validate(await _service(session, principal).create(body.to_values()))


@router.put("/{amenity_id}", response_model=AmenityOut)
async def update_amenity(
    amenity_id: int,
    body: AmenityUpdate,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> AmenityOut:
    row = await _service(session, principal).update(amenity_id, body.to_values())
    return AmenityOut.model_validate(row)


@router.delete("/{amenity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_amenity(
    amenity_id: int,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> Response:
    await _service(session, principal).delete(amenity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
