import enum
import uuid

from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Table, UniqueConstraint
from sqlalchemy.orm import relationship

from careers.database import Base
from careers.database_types import GUID, utcnow


class JobStatus(str, enum.Enum):
    """
    Lifecycle of a job opening.

    draft -> pending_approval -> approved -> published -> archived
    pending_approval -> rejected -> pending_approval (resubmit)
    """
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    REJECTED = "rejected"
    PUBLISHED = "published"
    ARCHIVED = "archived"


job_departments = Table(
    "job_departments",
    Base.metadata,
    Column("job_id", GUID, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True),
    Column("department_id", GUID, ForeignKey("departments.id", ondelete="CASCADE"), primary_key=True),
)

job_offices = Table(
    "job_offices",
    Base.metadata,
    Column("job_id", GUID, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True),
    Column("office_id", GUID, ForeignKey("offices.id", ondelete="CASCADE"), primary_key=True),
)


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = (
        UniqueConstraint("job_board_id", "external_id", name="uq_job_board_external_id"),
    )

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)

    internal_id = Column(String(100), nullable=True)
    title = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    content = Column(Text, nullable=True)  # Sanitized HTML

    status = Column(String(30), nullable=False, default=JobStatus.DRAFT.value, index=True)

    job_board_id = Column(GUID, ForeignKey("job_boards.id", ondelete="SET NULL"), nullable=True, index=True)
    headcount_request_id = Column(
        GUID, ForeignKey("headcount_requests.id", ondelete="SET NULL"), nullable=True, unique=True
    )

    # ID of the posting in the source ATS for synced boards
    external_id = Column(String(100), nullable=True, index=True)

    departments = relationship("Department", secondary=job_departments, lazy="selectin")
    offices = relationship("Office", secondary=job_offices, lazy="selectin")

    # Approval workflow
    created_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    approved_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    rejected_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    rejected_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    published_date = Column(DateTime, nullable=True)
    last_status_change_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
