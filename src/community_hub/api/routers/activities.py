"""
community_hub.api.routers.activities

Community activities: readable by every authenticated user, managed by admins.
`/upcoming` lists active activities from today on, soonest first.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.access.policy import POLICIES
from community_hub.api.deps import db_session, list_query
from community_hub.api.schemas.activities import ActivityCreate, ActivityOut, ActivityUpdate
from community_hub.api.schemas.common import ListResponse, to_list_response
from community_hub.auth.deps import get_principal, require_admin
from community_hub.auth.models import Principal
from community_hub.db.repositories.activities import ActivityRepo
from community_hub.query.normalizer import FilterQuery
from community_hub.services.activities import ActivityService

router = APIRouter(prefix="/api/activities", tags=["activities"])


def _service(session: AsyncSession, principal: Principal) -> ActivityService:
    return ActivityService(
        session=session,
        repo=ActivityRepo(session),
        policy=POLICIES["activities"],
        principal=principal,
    )


@router.get("", response_model=ListResponse[ActivityOut])
async def list_activities(
    query: FilterQuery = Depends(list_query),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ListResponse[ActivityOut]:
    page = await _service(session, principal).list(query)
    return to_list_response(page, ActivityOut)


@router.get("/upcoming", response_model=list[ActivityOut])
async def list_upcoming_activities(
    _: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[ActivityOut]:
    rows = await ActivityRepo(session).upcoming(today=date.today())
    return [ActivityOut.model_validate(r) for r in rows]


@router.get("/{activity_id}", response_model=ActivityOut)
async def get_activity(
    activity_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ActivityOut:
    return ActivityOut.model_validate(await _service(session, principal).get(activity_id))


@router.post("", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
async def create_activity(
    body: ActivityCreate,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> ActivityOut:
    return ActivityOut.model_validate(await _service(session, principal).create(body.to_values()))


@router.put("/{activity_id}", response_model=ActivityOut)
async def update_activity(
    activity_id: int,
    body: ActivityUpdate,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> ActivityOut:
    row = await _service(session, principal).update(activity_id, body.to_values())
    return ActivityOut.model_validate(row)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(
    activity_id: int,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> Response:
    await _service(session, principal).delete(activity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
