import uuid

from sqlalchemy import Column, String, DateTime, Integer, Text

from careers.database import Base
from careers.database_types import GUID, JSON, utcnow


DEFAULT_COMPANY_SETTINGS = {
    "approval_type": "headcount",  # headcount | job-opening
    "email_calendar_provider": "other",  # google | microsoft | other
}


class Company(Base):
    """A tenant. Every other row belongs to exactly one company."""
    __tablename__ = "companies"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)

    # Branding
    logo = Column(String(500), nullable=True)
    website = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    industry = Column(String(255), nullable=True)
    founded_year = Column(Integer, nullable=True)
    size = Column(String(50), nullable=True)
    primary_color = Column(String(20), nullable=True)
    secondary_color = Column(String(20), nullable=True)
    slogan = Column(String(500), nullable=True)
    mission = Column(Text, nullable=True)
    vision = Column(Text, nullable=True)

    # Structure: [{"text": "...", "icon": "..."}]
    values = Column(JSON, nullable=True, default=list)

    # Structure: {"linkedin": "...", "twitter": "...", "facebook": "...", "instagram": "..."}
    social_links = Column(JSON, nullable=True, default=dict)

    settings = Column(JSON, nullable=False, default=lambda: dict(DEFAULT_COMPANY_SETTINGS))

    # Email domains allowed to join this company (lower-cased)
    allowed_domains = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def get_setting(self, key: str):
        return (self.settings or {}).get(key, DEFAULT_COMPANY_SETTINGS.get(key))
