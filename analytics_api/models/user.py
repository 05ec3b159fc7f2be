import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from ..database import Base

ROLE_ADMIN = "admin"
ROLE_USER = "user"


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=_uuid)
    username = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(50), nullable=False, default=ROLE_USER)  # admin / user / view-only
    created_at = Column(DateTime, server_default=func.now())
    deleted_at = Column(DateTime, nullable=True)


class Team(Base):
    __tablename__ = "team"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(50), nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class TeamUser(Base):
    __tablename__ = "team_user"

    id = Column(String(36), primary_key=True, default=_uuid)
    team_id = Column(String(36), ForeignKey("team.id"), index=True, nullable=False)
    user_id = Column(String(36), ForeignKey("user.id"), index=True, nullable=False)
    role = Column(String(50), nullable=False, default="team-member")
    created_at = Column(DateTime, server_default=func.now())


class ApiKey(Base):
    __tablename__ = "api_key"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("user.id"), index=True, nullable=False)
    name = Column(String(255), nullable=True)
    key_hash = Column(String(64), unique=True, index=True, nullable=False)  # sha-256 hex, never the key
    created_at = Column(DateTime, server_default=func.now())
