import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from ..database import Base


class Report(Base):
    __tablename__ = "report"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("user.id"), index=True, nullable=False)
    website_id = Column(String(36), ForeignKey("website.id"), index=True, nullable=False)
    type = Column(String(200), nullable=False)  # funnel / insights / retention ...
    name = Column(String(200), nullable=False)
    description = Column(String(500), nullable=True)
    parameters = Column(JSON, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
