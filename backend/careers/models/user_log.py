import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey

from careers.database import Base
from careers.database_types import GUID, JSON, utcnow


class UserLog(Base):
    """
    Audit trail of console changes.

    Name and email are copied from the user so entries stay readable after
    the user is deleted.
    """
    __tablename__ = "user_logs"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)

    user_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    user_name = Column(String(255), nullable=True)
    user_email = Column(String(255), nullable=False)

    action = Column(String(50), nullable=False)  # create | update | delete | approve | ...
    resource_type = Column(String(50), nullable=False, index=True)
    resource_id = Column(String(64), nullable=True, index=True)
    details = Column(JSON, nullable=True)

    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
