"""
community_hub.api.routers.payments

Payments (rent, maintenance, services).

Admins create, edit and delete payments for any resident. Residents see their
own payments and may only mark a PENDING payment as PAID, optionally with a
transaction id.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from community_hub.access.policy import POLICIES
from community_hub.api.deps import db_session, list_query
from community_hub.api.schemas.common import ListResponse, to_list_response
from community_hub.api.schemas.payments import PaymentCreate, PaymentOut, PaymentUpdate
from community_hub.auth.deps import get_principal, require_admin
from community_hub.auth.models import Principal
from community_hub.db.models import Payment
from community_hub.db.repositories.payments import PaymentRepo
from community_hub.query.normalizer import FilterQuery
from community_hub.services.resources import ResourceService

router = APIRouter(prefix="/api/payments", tags=["payments"])


def _service(session: AsyncSession, principal: Principal) -> ResourceService[Payment]:
    return ResourceService(
        session=session,
        repo=PaymentRepo(session),
        policy=POLICIES["payments"],
        principal=principal,
    )


@router.get("", response_model=ListResponse[PaymentOut])
async def list_payments(
    query: FilterQuery = Depends(list_query),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> ListResponse[PaymentOut]:
    page = await _service(session, principal).list(query)
    return to_list_response(page, PaymentOut)


@router.get("/pending", response_model=list[PaymentOut])
async def list_my_pending_payments(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[PaymentOut]:
    # Always the caller's own bills, admins included.
    rows = await PaymentRepo(session).pending_for_user(principal.id)
    return [PaymentOut.model_validate(r) for r in rows]


@router.get("/{payment_id}", response_model=PaymentOut)
async def get_payment(
    payment_id: int,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> PaymentOut:
    return PaymentOut.model_validate(await _service(session, principal).get(payment_id))


@router.post("", response_model=PaymentOut, status_code=status.HTTP_201_CREATED)
async def create_payment(
    body: PaymentCreate,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> PaymentOut:
    return PaymentOut.model_validate(await _service(session, principal).create(body.to_values()))


@router.put("/{payment_id}", response_model=PaymentOut)
async def update_payment(
    payment_id: int,
    body: PaymentUpdate,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> PaymentOut:
    row = await _service(session, principal).update(payment_id, body.to_values())
    return PaymentOut.model_validate(row)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_payment(
    payment_id: int,
    principal: Principal = Depends(require_admin),
    session: AsyncSession = Depends(db_session),
) -> Response:
    await _service(session, principal).delete(payment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
