import enum
import uuid

from sqlalchemy import Column, String, DateTime, Boolean, Text, ForeignKey

from careers.database import Base
from careers.database_types import GUID, JSON, utcnow


class NotificationType(str, enum.Enum):
    JOB_APPLICATION = "job_application"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    INTERVIEW_FEEDBACK = "interview_feedback"
    HEADCOUNT_REQUEST = "headcount_request"
    SYSTEM = "system"


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(30), nullable=False, default=NotificationType.SYSTEM.value)
    read = Column(Boolean, nullable=False, default=False, index=True)
    data = Column(JSON, nullable=True)  # ids the console links to

    created_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
