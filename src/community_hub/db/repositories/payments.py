from __future__ import annotations

from sqlalchemy.orm import selectinload

from community_hub.db.models import Payment, PaymentStatus, PaymentType, Residence, User
from community_hub.db.repositories.base import ResourceRepo
from community_hub.query.spec import FilterField, ListSpec, parse_enum, parse_int


class PaymentRepo(ResourceRepo[Payment]):
    model = Payment
    list_spec = ListSpec(
        search=(Payment.description, Payment.transaction_id),
        filters={
            "status": FilterField(Payment.status, parse_enum(PaymentStatus)),
            "type": FilterField(Payment.type, parse_enum(PaymentType)),
            "userId": FilterField(Payment.user_id, parse_int),
            "residenceId": FilterField(Payment.residence_id, parse_int),
        },
        date_column=Payment.due_date,
        sortable={
            "dueDate": Payment.due_date,
            "amount": Payment.amount,
            "createdAt": Payment.created_at,
        },
        default_order=(Payment.due_date.desc(), Payment.id.desc()),
    )
    load_options = (selectinload(Payment.user), selectinload(Payment.residence))
    references = {"user_id": User, "residence_id": Residence}

    async def pending_for_user(self, user_id: int) -> list[Payment]:
        # Earliest due first so residents see what to pay next.
        return await self.find(
            Payment.user_id == user_id,
            Payment.status == PaymentStatus.pending,
            order_by=(Payment.due_date.asc(), Payment.id.asc()),
        )
