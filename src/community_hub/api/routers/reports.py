"""
community_hub.api.routers.reports

Resident reports (complaints/maintenance requests).

Residents see and file their own reports, may edit the description and may
withdraw a report while it is still PENDING. Admins see every report and drive
its status.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.access.policy import POLICIES
from community_hub.api.deps import db_session, list_query
from community_hub.api.schemas.common import ListResponse, to_list_response
from community_hub.api.schemas.reports import ReportCreate, ReportOut, ReportUpdate
from community_hub.auth.deps import get_principal
from community_hub.auth.models import Principal
from community_hub.db.models import Report
from community_hub.db.repositories.reports import ReportRepo
from community_hub.query.normalizer import FilterQuery
from community_hub.services.resources import ResourceService

router = APIRouter(prefix="/api/reports", tags=["reports"])


def _service(session: AsyncSession, principal: Principal) -> ResourceService[Report]:
    return ResourceService(
        session=session,
        repo=ReportRepo(session),
        policy=POLICIES["reports"],
        principal=principal,
    )


@router.get("", response_model=ListResponse[ReportOut])
async def list_reports(
    query: FilterQuery = Depends(list_query),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ListResponse[ReportOut]:
    page = await _service(session, principal).list(query)
    return to_list_response(page, ReportOut)


@router.get("/{report_id}", response_model=ReportOut)
async def get_report(
    report_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ReportOut:
    return ReportOut.model_validate(await _service(session, principal).get(report_id))


@router.post("", response_model=ReportOut, status_code=status.HTTP_201_CREATED)
async def create_report(
    body: ReportCreate,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ReportOut:
    return ReportOut.model_validate(await _service(session, principal).create(body.to_values()))


@router.put("/{report_id}", response_model=ReportOut)
async def update_report(
    report_id: int,
    body: ReportUpdate,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ReportOut:
    row = await _service(session, principal).update(report_id, body.to_values())
    return ReportOut.model_validate(row)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_report(
    report_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> Response:
    await _service(session, principal).delete(report_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
