import enum
import uuid

from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from careers.database import Base
from careers.database_types import GUID, utcnow


class HeadcountStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class HeadcountRequest(Base):
    __tablename__ = "headcount_requests"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)

    role_title = Column(String(255), nullable=False)
    department_id = Column(GUID, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True)
    team_name = Column(String(255), nullable=True)
    reason = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=HeadcountStatus.PENDING.value, index=True)

    requested_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    reviewed_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    review_notes = Column(Text, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)

    # The opening created from this request once approved (at most one)
    job = relationship(
        "Job",
        primaryjoin="HeadcountRequest.id == foreign(Job.headcount_request_id)",
        uselist=False,
        viewonly=True,
        lazy="selectin",
    )

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @property
    def job_id(self):
        return self.job.id if self.job is not None else None
