import asyncio
import logging

from fastapi import APIRouter, Depends, Request

from ..auth import Auth
from ..dependencies import get_auth, get_queries
from ..queries import Queries
from ..schemas.requests import PageviewsQuery
from ..utils.date_range import get_compare_date, get_request_date_range
from ..utils.request import check_request, get_request_filters
from ..utils.response import bad_request, json_response, unauthorized

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{website_id}/pageviews")
async def website_pageviews(
    website_id: str,
    request: Request,
    auth: Auth = Depends(get_auth),
    queries: Queries = Depends(get_queries),
):
    """
    Pageview and session series for a website.
    With ``compare`` the same series are returned for the comparison range.
    """
    query, error = check_request(request, PageviewsQuery)

    if error:
        return bad_request(error)

    identity = await auth.check_auth(request)

    if not identity or not await auth.can_view_website(identity, website_id):
        logger.warning(f"⛔ Unauthorized pageviews request for website {website_id}")
        return unauthorized()

    date_range = get_request_date_range(query)
    start_date, end_date = date_range.start_date, date_range.end_date

    filters = {
        **get_request_filters(query),
        "start_date": start_date,
        "end_date": end_date,
        "timezone": query.timezone,
        "unit": date_range.unit,
    }

    pageviews, sessions = await asyncio.gather(
        queries.get_pageview_stats(website_id, filters),
        queries.get_session_stats(website_id, filters),
    )

    if query.compare:
        compare_start_date, compare_end_date = get_compare_date(query.compare, start_date, end_date)
        compare_filters = {**filters, "start_date": compare_start_date, "end_date": compare_end_date}

        compare_pageviews, compare_sessions = await asyncio.gather(
            queries.get_pageview_stats(website_id, compare_filters),
            queries.get_session_stats(website_id, compare_filters),
        )

        return json_response({
            "pageviews": pageviews,
            "sessions": sessions,
            "startDate": start_date,
            "endDate": end_date,
            "compare": {
                "pageviews": compare_pageviews,
                "sessions": compare_sessions,
                "startDate": compare_start_date,
                "endDate": compare_end_date,
            },
        })

    return json_response({"pageviews": pageviews, "sessions": sessions})
