from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from ..database import Base

EVENT_TYPE_PAGEVIEW = 1
EVENT_TYPE_CUSTOM = 2


class WebsiteEvent(Base):
    __tablename__ = "website_event"
    __table_args__ = (
        Index("ix_website_event_website_id_created_at", "website_id", "created_at"),
        Index("ix_website_event_website_id_session_id_created_at", "website_id", "session_id", "created_at"),
    )

    id = Column(String(36), primary_key=True)
    website_id = Column(String(36), ForeignKey("website.id"), nullable=False)
    session_id = Column(String(36), ForeignKey("session.id"), nullable=False)
    visit_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, nullable=False)  # UTC
    url_path = Column(String(500), nullable=False)
    url_query = Column(String(500), nullable=True)
    referrer_domain = Column(String(500), nullable=True)
    page_title = Column(String(500), nullable=True)
    hostname = Column(String(100), nullable=True)
    event_type = Column(Integer, nullable=False, default=EVENT_TYPE_PAGEVIEW)  # 1 pageview / 2 custom
    event_name = Column(String(50), nullable=True)
