import uuid

from sqlalchemy import Column, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from careers.database import Base
from careers.database_types import GUID, JSON, utcnow


DEFAULT_STAGE_MINUTES = 60


class InterviewProcess(Base):
    """
    The interview loop for a job role.

    `stages` is an ordered list of documents:
    {title, description, considerations: [{title, description}],
     email_template, order, duration_minutes}
    """
    __tablename__ = "interview_processes"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    job_role_id = Column(GUID, ForeignKey("job_roles.id", ondelete="CASCADE"), nullable=False, index=True)

    stages = Column(JSON, nullable=False, default=list)

    created_by_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    job_role = relationship("JobRole", lazy="selectin")
    created_by = relationship("User", lazy="selectin")

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def stage_at(self, stage_order: int) -> dict:
        """Stage for a 1-based interview round. Raises IndexError past the last stage."""
        if stage_order < 1 or stage_order > len(self.stages or []):
            raise IndexError(stage_order)
        return self.stages[stage_order - 1]
