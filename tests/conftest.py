"""Shared fixtures: in-memory database, seeded data and fake collaborators."""

import asyncio
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from analytics_api.auth import Identity
from analytics_api.database import Base
from analytics_api.dependencies import get_auth, get_queries
from analytics_api.main import app
from analytics_api.models.report import Report
from analytics_api.models.user import ApiKey, Team, TeamUser, User, ROLE_ADMIN, ROLE_USER
from analytics_api.models.website import Website
from analytics_api.models.website_event import WebsiteEvent, EVENT_TYPE_CUSTOM, EVENT_TYPE_PAGEVIEW
from analytics_api.models.website_session import WebsiteSession
from analytics_api.services.auth_service import hash_api_key

OWNED_SITE = "11111111-1111-1111-1111-111111111111"
TEAM_SITE = "22222222-2222-2222-2222-222222222222"
DELETED_SITE = "33333333-3333-3333-3333-333333333333"
OTHER_SITE = "44444444-4444-4444-4444-444444444444"

SESSION_A = "aaaaaaaa-0000-0000-0000-000000000001"
SESSION_B = "aaaaaaaa-0000-0000-0000-000000000002"
SESSION_OTHER = "aaaaaaaa-0000-0000-0000-000000000003"

KEYS = {
    "admin": "admin-key",
    "alice": "alice-key",
    "bob": "bob-key",
    "carol": "carol-key",
    "dave": "dave-key",
}


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory sqlite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(db):
    """
    Users, a team, websites, sessions, events and reports.

    alice owns OWNED_SITE, bob reaches TEAM_SITE through the team, carol has
    no websites, dave is deleted, admin sees everything.
    """
    users = {
        "admin": User(id="u-admin", username="admin", role=ROLE_ADMIN),
        "alice": User(id="u-alice", username="alice", role=ROLE_USER),
        "bob": User(id="u-bob", username="bob", role=ROLE_USER),
        "carol": User(id="u-carol", username="carol", role=ROLE_USER),
        "dave": User(id="u-dave", username="dave", role=ROLE_USER, deleted_at=datetime(2024, 1, 1)),
    }
    db.add_all(users.values())
    db.add(Team(id="t-1", name="Marketing"))
    db.flush()
    db.add(TeamUser(team_id="t-1", user_id="u-bob"))
    db.add_all(
        ApiKey(user_id=users[name].id, name="test", key_hash=hash_api_key(key))
        for name, key in KEYS.items()
    )

    db.add_all([
        Website(id=OWNED_SITE, name="Blog", domain="blog.example.com", share_id="blog-share", user_id="u-alice"),
        Website(id=TEAM_SITE, name="Shop", domain="shop.example.com", team_id="t-1"),
        Website(id=DELETED_SITE, name="Old", user_id="u-alice", share_id="old-share",
                deleted_at=datetime(2024, 1, 1)),
        Website(id=OTHER_SITE, name="Other", user_id="u-carol"),
    ])
    db.flush()

    db.add_all([
        WebsiteSession(id=SESSION_A, website_id=OWNED_SITE, browser="chrome", os="Mac OS", country="US",
                       created_at=datetime(2023, 11, 14, 22, 0)),
        WebsiteSession(id=SESSION_B, website_id=OWNED_SITE, browser="firefox", os="Linux", country="DE",
                       created_at=datetime(2023, 11, 14, 22, 30)),
        WebsiteSession(id=SESSION_OTHER, website_id=OTHER_SITE, browser="safari",
                       created_at=datetime(2023, 11, 14, 22, 0)),
    ])
    db.flush()

    def event(event_id, session_id, created_at, url_path="/", event_type=EVENT_TYPE_PAGEVIEW,
              website_id=OWNED_SITE, **kwargs):
        return WebsiteEvent(id=event_id, website_id=website_id, session_id=session_id, visit_id="v-" + session_id,
                            created_at=created_at, url_path=url_path, event_type=event_type, **kwargs)

    db.add_all([
        event("e-1", SESSION_A, datetime(2023, 11, 14, 22, 5), "/", referrer_domain="google.com"),
        event("e-2", SESSION_A, datetime(2023, 11, 14, 22, 10), "/blog/first-post", page_title="First post"),
        event("e-3", SESSION_A, datetime(2023, 11, 14, 22, 12), "/blog/first-post",
              event_type=EVENT_TYPE_CUSTOM, event_name="signup-click"),
        event("e-4", SESSION_B, datetime(2023, 11, 14, 22, 40), "/pricing"),
        event("e-5", SESSION_B, datetime(2023, 11, 14, 23, 15), "/blog/second-post"),
        # Previous day, for comparison ranges
        event("e-6", SESSION_B, datetime(2023, 11, 13, 22, 20), "/"),
        # Outside every queried window
        event("e-7", SESSION_A, datetime(2023, 11, 15, 3, 0), "/late"),
        event("e-8", SESSION_OTHER, datetime(2023, 11, 14, 22, 5), "/", website_id=OTHER_SITE),
    ])

    db.add_all([
        Report(id="r-1", user_id="u-alice", website_id=OWNED_SITE, type="funnel", name="Signup funnel",
               description="Landing to signup", parameters={"steps": ["/", "/signup"]},
               created_at=datetime(2024, 1, 1), updated_at=datetime(2024, 1, 1)),
        Report(id="r-2", user_id="u-alice", website_id=OWNED_SITE, type="retention", name="Weekly retention",
               created_at=datetime(2024, 1, 2), updated_at=datetime(2024, 1, 2)),
        Report(id="r-3", user_id="u-alice", website_id=OWNED_SITE, type="insights", name="Blog insights",
               description="Traffic to the blog", created_at=datetime(2024, 1, 3), updated_at=datetime(2024, 1, 3)),
        Report(id="r-4", user_id="u-carol", website_id=OTHER_SITE, type="funnel", name="Other funnel",
               created_at=datetime(2024, 1, 4), updated_at=datetime(2024, 1, 4)),
    ])
    db.commit()
    return users


class FakeAuth:
    """Auth gate stand-in: one fixed identity and a set of viewable websites."""

    def __init__(self, identity=None, allowed=()):
        self.identity = identity
        self.allowed = set(allowed)
        self.calls = []

    async def check_auth(self, request):
        self.calls.append(("check_auth",))
        return self.identity

    async def can_view_website(self, identity, website_id):
        self.calls.append(("can_view_website", website_id))
        return website_id in self.allowed


class FakeQueries:
    """
    Query layer stand-in.

    Every stats call records a start and an end event around a yield to the
    event loop, so tests can see which calls overlapped.
    """

    def __init__(self):
        self.calls = []
        self.events = []
        self.reports = {"data": [], "count": 0, "page": 1, "pageSize": 20}
        self.activity = []

    async def _stats(self, name, website_id, filters):
        self.calls.append((name, website_id, dict(filters)))
        self.events.append(("start", name, filters["start_date"]))
        await asyncio.sleep(0)
        self.events.append(("end", name, filters["start_date"]))
        return [{"x": f"{name}-{filters['start_date'].isoformat()}", "y": 1}]

    async def get_pageview_stats(self, website_id, filters):
        return await self._stats("pageviews", website_id, filters)

    async def get_session_stats(self, website_id, filters):
        return await self._stats("sessions", website_id, filters)

    async def get_website_reports(self, website_id, page, page_size, search=None):
        self.calls.append(("reports", website_id, {"page": page, "page_size": page_size, "search": search}))
        return self.reports

    async def get_session_activity(self, website_id, session_id, start_date, end_date):
        self.calls.append(("activity", website_id, {
            "session_id": session_id, "start_date": start_date, "end_date": end_date,
        }))
        return self.activity


@pytest.fixture
def fake_auth():
    return FakeAuth(identity=Identity(user_id="u-alice", username="alice", role=ROLE_USER), allowed={OWNED_SITE})


@pytest.fixture
def fake_queries():
    return FakeQueries()


@pytest.fixture
def client(fake_auth, fake_queries):
    """Test client with the auth gate and query layer replaced by fakes."""
    app.dependency_overrides[get_auth] = lambda: fake_auth
    app.dependency_overrides[get_queries] = lambda: fake_queries
    yield TestClient(app)
    app.dependency_overrides.clear()
