"""
community_hub.api.routers.residences

Residences: readable by every authenticated user, managed by admins.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.access.policy import POLICIES
from community_hub.api.deps import db_session, list_query
from community_hub.api.schemas.common import ListResponse, to_list_response
from community_hub.api.schemas.residences import ResidenceCreate, ResidenceOut, ResidenceUpdate
from community_hub.auth.deps import get_principal, require_admin
from community_hub.auth.models import Principal
from community_hub.db.models import Residence
from community_hub.db.repositories.residences import ResidenceRepo
from community_hub.query.normalizer import FilterQuery
from community_hub.services.resources import ResourceService

router = APIRouter(prefix="/api/residences", tags=["residences"])


def _service(session: AsyncSession, principal: Principal) -> ResourceService[Residence]:
    return ResourceService(
        session=session,
        repo=ResidenceRepo(session),
        policy=POLICIES["residences"],
        principal=principal,
    )


@router.get("", response_model=ListResponse[ResidenceOut])
async def list_residences(
    query: FilterQuery = Depends(list_query),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ListResponse[ResidenceOut]:
    page = await _service(session, principal).list(query)
    return to_list_response(page, ResidenceOut)


@router.get("/available", response_model=list[ResidenceOut])
async def list_available_residences(
    _: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[ResidenceOut]:
    rows = await ResidenceRepo(session).available()
    return [ResidenceOut.model_validate(r) for r in rows]


@router.get("/{residence_id}", response_model=ResidenceOut)
async def get_residence(
    residence_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ResidenceOut:
    return ResidenceOut.model_validate(await _service(session, principal).get(residence_id))


@router.post("", response_model=ResidenceOut, status_code=status.HTTP_201_CREATED)
async def create_residence(
    body: ResidenceCreate,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> ResidenceOut:
    row = await _service(session, principal).create(body.to_values())
    return ResidenceOut.model_validate(row)


@router.put("/{residence_id}", response_model=ResidenceOut)
async def update_residence(
    residence_id: int,
    body: ResidenceUpdate,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> ResidenceOut:
    row = await _service(session, principal).update(residence_id, body.to_values())
    return ResidenceOut.model_validate(row)


@router.delete("/{residence_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_residence(
    residence_id: int,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> Response:
    await _service(session, principal).delete(residence_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
