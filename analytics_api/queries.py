"""
Async facade over the query services.

Each call runs the synchronous SQLAlchemy work in the threadpool with its
own session, so calls issued together with ``asyncio.gather`` never share a
session.
"""
from datetime import datetime
from typing import Optional

from starlette.concurrency import run_in_threadpool

from .database import SessionLocal
from .services import report_service, session_service, stats_service


class Queries:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    async def _run(self, fn, *args, **kwargs):
        def call():
            with self.session_factory() as db:
                return fn(db, *args, **kwargs)

        return await run_in_threadpool(call)

    async def get_pageview_stats(self, website_id: str, filters: dict) -> list:
        return await self._run(stats_service.get_pageview_stats, website_id, filters)

    async def get_session_stats(self, website_id: str, filters: dict) -> list:
        return await self._run(stats_service.get_session_stats, website_id, filters)

    async def get_website_reports(
        self, website_id: str, page: int, page_size: int, search: Optional[str] = None
    ) -> dict:
        return await self._run(
            report_service.get_website_reports, website_id, page=page, page_size=page_size, search=search
        )

    async def get_session_activity(
        self, website_id: str, session_id: str, start_date: datetime, end_date: datetime
    ) -> list:
        return await self._run(
            session_service.get_session_activity, website_id, session_id, start_date, end_date
        )
