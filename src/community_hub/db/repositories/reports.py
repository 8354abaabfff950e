from __future__ import annotations

from sqlalchemy.orm import selectinload

from community_hub.db.models import Report, ReportPriority, ReportStatus, Residence, User
from community_hub.db.repositories.base import ResourceRepo
from community_hub.query.spec import FilterField, ListSpec, parse_enum, parse_int


class ReportRepo(ResourceRepo[Report]):
    model = Report
    list_spec = ListSpec(
        search=(Report.title, Report.description, Report.category),
        filters={
            "status": FilterField(Report.status, parse_enum(ReportStatus)),
            "priority": FilterField(Report.priority, parse_enum(ReportPriority)),
            "category": FilterField(Report.category),
            "userId": FilterField(Report.user_id, parse_int),
            "residenceId": FilterField(Report.residence_id, parse_int),
        },
        date_column=Report.created_at,
        sortable={
            "createdAt": Report.created_at,
            "updatedAt": Report.updated_at,
            "title": Report.title,
        },
        default_order=(Report.created_at.desc(), Report.id.desc()),
    )
    load_options = (selectinload(Report.user), selectinload(Report.residence))
    references = {"residence_id": Residence, "user_id": User}
