import uuid

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey

from careers.database import Base
from careers.database_types import GUID, utcnow


class Office(Base):
    __tablename__ = "offices"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    address = Column(String(500), nullable=False)

    # At most one office per company is the headquarters
    is_main = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
