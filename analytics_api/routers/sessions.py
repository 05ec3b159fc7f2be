import logging

from fastapi import APIRouter, Depends, Request

from ..auth import Auth
from ..dependencies import get_auth, get_queries
from ..queries import Queries
from ..schemas.requests import SessionActivityQuery
from ..utils.date_range import parse_timestamp
from ..utils.request import check_request
from ..utils.response import bad_request, json_response, unauthorized

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{website_id}/sessions/{session_id}/activity")
async def session_activity(
    website_id: str,
    session_id: str,
    request: Request,
    auth: Auth = Depends(get_auth),
    queries: Queries = Depends(get_queries),
):
    """
    Activity timeline of one session.
    Permission is checked on the website; the query itself is scoped to it.
    """
    query, error = check_request(request, SessionActivityQuery)

    if error:
        return bad_request(error)

    identity = await auth.check_auth(request)

    if not identity or not await auth.can_view_website(identity, website_id):
        logger.warning(f"⛔ Unauthorized session activity request for website {website_id}")
        return unauthorized()

    start_date = parse_timestamp(query.start_at)
    end_date = parse_timestamp(query.end_at)

    data = await queries.get_session_activity(website_id, session_id, start_date, end_date)

    return json_response(data)
