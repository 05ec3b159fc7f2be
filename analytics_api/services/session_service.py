from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..models.website_event import WebsiteEvent
from ..utils.date_range import from_utc_naive, to_utc_naive


def get_session_activity(
    db: Session,
    website_id: str,
    session_id: str,
    start_date: datetime,
    end_date: datetime,
    limit: Optional[int] = None,
) -> list:
    """Events of one session within the window, newest first"""
    events = (
        db.query(WebsiteEvent)
        .filter(
            WebsiteEvent.website_id == website_id,
            WebsiteEvent.session_id == session_id,
            WebsiteEvent.created_at >= to_utc_naive(start_date),
            WebsiteEvent.created_at <= to_utc_naive(end_date),
        )
        .order_by(WebsiteEvent.created_at.desc())
        .limit(limit or settings.SESSION_ACTIVITY_LIMIT)
        .all()
    )

    return [
        {
            "createdAt": from_utc_naive(event.created_at),
            "urlPath": event.url_path,
            "urlQuery": event.url_query,
            "referrerDomain": event.referrer_domain,
            "eventId": event.id,
            "eventType": event.event_type,
            "eventName": event.event_name,
            "visitId": event.visit_id,
        }
        for event in events
    ]
