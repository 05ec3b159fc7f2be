import logging

from fastapi import APIRouter, Depends, Request

from ..auth import Auth
from ..config import settings
from ..dependencies import get_auth, get_queries
from ..queries import Queries
from ..schemas.requests import ReportsQuery
from ..utils.request import check_request
from ..utils.response import bad_request, json_response, unauthorized

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{website_id}/reports")
async def website_reports(
    website_id: str,
    request: Request,
    auth: Auth = Depends(get_auth),
    queries: Queries = Depends(get_queries),
):
    query, error = check_request(request, ReportsQuery)

    if error:
        return bad_request(error)

    identity = await auth.check_auth(request)

    if not identity or not await auth.can_view_website(identity, website_id):
        logger.warning(f"⛔ Unauthorized reports request for website {website_id}")
        return unauthorized()

    data = await queries.get_website_reports(
        website_id,
        page=int(query.page or 1),
        page_size=int(query.page_size or settings.DEFAULT_PAGE_SIZE),
        search=query.search,
    )

    return json_response(data)
