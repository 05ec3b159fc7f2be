import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from ..database import Base


class Website(Base):
    __tablename__ = "website"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    domain = Column(String(500), nullable=True)
    share_id = Column(String(50), unique=True, nullable=True)  # public share link token
    user_id = Column(String(36), ForeignKey("user.id"), index=True, nullable=True)
    team_id = Column(String(36), ForeignKey("team.id"), index=True, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    deleted_at = Column(DateTime, nullable=True)
