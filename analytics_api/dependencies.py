"""
Providers for the collaborators handlers depend on.
Tests swap these out through ``app.dependency_overrides``.
"""
from .auth import Auth
from .database import SessionLocal
from .queries import Queries


def get_auth() -> Auth:
    return Auth(SessionLocal)


def get_queries() -> Queries:
    return Queries(SessionLocal)
