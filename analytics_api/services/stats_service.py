"""
Pageview and session time series for a website.

Matching events are fetched with SQLAlchemy and bucketed in Python so the
unit/timezone handling is identical on sqlite and Postgres.
"""
import logging
from collections import Counter, defaultdict

from sqlalchemy import not_
from sqlalchemy.orm import Session

from ..models.website_event import WebsiteEvent, EVENT_TYPE_CUSTOM, EVENT_TYPE_PAGEVIEW
from ..models.website_session import WebsiteSession
from ..utils.date_range import bucket_label, to_utc_naive

logger = logging.getLogger(__name__)

EVENT_FILTER_COLUMNS = {
    "url": WebsiteEvent.url_path,
    "referrer": WebsiteEvent.referrer_domain,
    "title": WebsiteEvent.page_title,
    "query": WebsiteEvent.url_query,
    "host": WebsiteEvent.hostname,
    "event": WebsiteEvent.event_name,
}

SESSION_FILTER_COLUMNS = {
    "os": WebsiteSession.os,
    "browser": WebsiteSession.browser,
    "device": WebsiteSession.device,
    "country": WebsiteSession.country,
    "region": WebsiteSession.region,
    "city": WebsiteSession.city,
    "language": WebsiteSession.language,
}

OPERATORS = ("eq", "neq", "c", "dnc")


def parse_filter_value(value: str):
    """Split ``"c.blog"`` into ``("c", "blog")``. No known prefix means equality."""
    operator, sep, operand = value.partition(".")
    if sep and operator in OPERATORS:
        return operator, operand
    return "eq", value


def _condition(column, value: str):
    operator, operand = parse_filter_value(value)
    if operator == "neq":
        return column != operand
    if operator == "c":
        return column.contains(operand, autoescape=True)
    if operator == "dnc":
        return not_(column.contains(operand, autoescape=True))
    return column == operand


def apply_filters(query, filters: dict):
    if any(key in filters for key in SESSION_FILTER_COLUMNS):
        query = query.join(WebsiteSession, WebsiteSession.id == WebsiteEvent.session_id)

    for key, value in filters.items():
        column = EVENT_FILTER_COLUMNS.get(key)
        if column is None:
            column = SESSION_FILTER_COLUMNS.get(key)
        if column is None:
            continue
        query = query.filter(_condition(column, value))

    return query


def _pageview_rows(db: Session, website_id: str, filters: dict):
    # An event filter counts the matching custom events instead of pageviews.
    event_type = EVENT_TYPE_CUSTOM if filters.get("event") else EVENT_TYPE_PAGEVIEW

    query = db.query(WebsiteEvent.created_at, WebsiteEvent.session_id).filter(
        WebsiteEvent.website_id == website_id,
        WebsiteEvent.event_type == event_type,
        WebsiteEvent.created_at >= to_utc_naive(filters["start_date"]),
        WebsiteEvent.created_at <= to_utc_naive(filters["end_date"]),
    )
    return apply_filters(query, filters).all()


def _series(counts: dict) -> list:
    return [{"x": x, "y": y} for x, y in sorted(counts.items())]


def get_pageview_stats(db: Session, website_id: str, filters: dict) -> list:
    unit, tz = filters["unit"], filters["timezone"]
    rows = _pageview_rows(db, website_id, filters)

    counts = Counter(bucket_label(row.created_at, unit, tz) for row in rows)

    logger.debug(f"Pageview stats for {website_id}: {len(rows)} events in {len(counts)} buckets")
    return _series(counts)


def get_session_stats(db: Session, website_id: str, filters: dict) -> list:
    unit, tz = filters["unit"], filters["timezone"]
    rows = _pageview_rows(db, website_id, filters)

    sessions = defaultdict(set)
    for row in rows:
        sessions[bucket_label(row.created_at, unit, tz)].add(row.session_id)

    return _series({x: len(ids) for x, ids in sessions.items()})
