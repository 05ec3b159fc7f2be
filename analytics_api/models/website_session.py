from sqlalchemy import Column, String, DateTime, ForeignKey
from ..database import Base


class WebsiteSession(Base):
    """A visitor session. Attributes here back the os/browser/device/geo filters."""
    __tablename__ = "session"

    id = Column(String(36), primary_key=True)
    website_id = Column(String(36), ForeignKey("website.id"), index=True, nullable=False)
    hostname = Column(String(100), nullable=True)
    browser = Column(String(20), nullable=True)
    os = Column(String(20), nullable=True)
    device = Column(String(20), nullable=True)
    screen = Column(String(11), nullable=True)
    language = Column(String(35), nullable=True)
    country = Column(String(2), nullable=True)
    region = Column(String(20), nullable=True)
    city = Column(String(50), nullable=True)
    created_at = Column(DateTime, index=True)  # UTC
