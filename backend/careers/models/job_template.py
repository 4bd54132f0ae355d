import uuid

from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from careers.database import Base
from careers.database_types import GUID, utcnow


class JobTemplate(Base):
    """Reusable job description for a job role, used to prefill new jobs."""
    __tablename__ = "job_templates"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)  # Sanitized HTML

    job_role_id = Column(GUID, ForeignKey("job_roles.id", ondelete="CASCADE"), nullable=False, index=True)
    department_id = Column(GUID, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True)

    job_role = relationship("JobRole", lazy="selectin")
    department = relationship("Department", lazy="selectin")

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
