"""
Authentication and per-website view permission.

Callers authenticate with an API key (``X-API-Key`` header or
``Authorization: Bearer <key>``) or with a website share id
(``X-Share-Id`` header), which grants read access to that website only.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from starlette.concurrency import run_in_threadpool

from .database import SessionLocal
from .models.user import ROLE_ADMIN
from .services import auth_service

logger = logging.getLogger(__name__)

SHARE_ID_HEADER = "X-Share-Id"


@dataclass
class Identity:
    user_id: Optional[str] = None
    username: Optional[str] = None
    role: Optional[str] = None
    share_website_id: Optional[str] = None


def get_request_api_key(request: Request) -> Optional[str]:
    api_key = request.headers.get("X-API-Key") or request.headers.get("Authorization")

    if api_key and api_key.startswith("Bearer "):
        api_key = api_key.replace("Bearer ", "", 1)

    return api_key or None


class Auth:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    async def check_auth(self, request: Request) -> Optional[Identity]:
        api_key = get_request_api_key(request)
        share_id = request.headers.get(SHARE_ID_HEADER)

        if not api_key and not share_id:
            return None

        return await run_in_threadpool(self._authenticate, api_key, share_id)

    async def can_view_website(self, identity: Identity, website_id: str) -> bool:
        if identity.share_website_id:
            return identity.share_website_id == website_id

        if identity.role == ROLE_ADMIN:
            return True

        return await run_in_threadpool(self._can_view_website, identity.user_id, website_id)

    def _authenticate(self, api_key: Optional[str], share_id: Optional[str]) -> Optional[Identity]:
        with self.session_factory() as db:
            if api_key:
                user = auth_service.get_user_by_api_key(db, api_key)
                if not user:
                    logger.warning("❌ Invalid API key attempt")
                    return None
                return Identity(user_id=user.id, username=user.username, role=user.role)

            website = auth_service.get_website_by_share_id(db, share_id)
            if not website:
                logger.warning("❌ Invalid share id attempt")
                return None
            return Identity(share_website_id=website.id)

    def _can_view_website(self, user_id: str, website_id: str) -> bool:
        with self.session_factory() as db:
            website = auth_service.get_website(db, website_id)
            if not website:
                return False

            if website.user_id and website.user_id == user_id:
                return True

            if website.team_id:
                return auth_service.is_team_member(db, website.team_id, user_id)

            return False
