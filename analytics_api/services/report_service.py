from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..models.report import Report
from ..models.user import User
from ..utils.date_range import from_utc_naive


def _report_out(report: Report, username: Optional[str]) -> dict:
    return {
        "id": report.id,
        "userId": report.user_id,
        "websiteId": report.website_id,
        "type": report.type,
        "name": report.name,
        "description": report.description,
        "parameters": report.parameters,
        "createdAt": from_utc_naive(report.created_at),
        "updatedAt": from_utc_naive(report.updated_at),
        "user": {"id": report.user_id, "username": username},
    }


def get_website_reports(
    db: Session,
    website_id: str,
    page: int = 1,
    page_size: int = 20,
    search: Optional[str] = None,
) -> dict:
    """
    One page of a website's saved reports, newest first.
    ``search`` matches name, description or type, case-insensitively.
    """
    query = (
        db.query(Report, User.username)
        .outerjoin(User, User.id == Report.user_id)
        .filter(Report.website_id == website_id)
    )

    if search:
        query = query.filter(
            or_(
                Report.name.icontains(search, autoescape=True),
                Report.description.icontains(search, autoescape=True),
                Report.type.icontains(search, autoescape=True),
            )
        )

    count = query.count()
    rows = (
        query.order_by(Report.created_at.desc(), Report.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )

    return {
        "data": [_report_out(report, username) for report, username in rows],
        "count": count,
        "page": page,
        "pageSize": page_size,
    }
