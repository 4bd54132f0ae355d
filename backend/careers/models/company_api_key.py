import uuid

from sqlalchemy import Column, String, DateTime, Text, Boolean, ForeignKey

from careers.database import Base
from careers.database_types import GUID, utcnow


class CompanyApiKey(Base):
    """
    Credentials the public careers site uses to call the public API.

    The secret is shown once at creation; only its hash is stored.
    """
    __tablename__ = "company_api_keys"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)

    key = Column(String(64), nullable=False, unique=True, index=True)  # ck_<hex>
    secret_hash = Column(String(128), nullable=False)
    secret_hint = Column(String(32), nullable=False)  # masked form of the secret

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    last_used_at = Column(DateTime, nullable=True)

    created_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
