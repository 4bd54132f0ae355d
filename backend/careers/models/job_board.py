import uuid

from sqlalchemy import Column, String, DateTime, Text, Boolean, ForeignKey

from careers.database import Base
from careers.database_types import GUID, JSON, utcnow


# Sources a job board can be fed from
JOB_BOARD_SOURCES = ("greenhouse", "ashby", "custom")


class JobBoard(Base):
    __tablename__ = "job_boards"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    custom_domain = Column(String(255), nullable=True, unique=True, index=True)

    # External boards mirror postings from an ATS and are refreshed, not edited
    is_external = Column(Boolean, nullable=False, default=False)
    source = Column(String(20), nullable=False, default="custom")
    external_id = Column(String(255), nullable=True)

    # Structure: {"board_token": "acme"} for greenhouse/ashby
    settings = Column(JSON, nullable=False, default=dict)

    is_active = Column(Boolean, nullable=False, default=True)
    last_synced_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
