import enum
import uuid

from sqlalchemy import Column, String, DateTime, Integer, Float, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship

from careers.database import Base
from careers.database_types import GUID, utcnow


class ApplicationStatus(str, enum.Enum):
    APPLIED = "applied"
    SCREENING = "screening"
    INTERVIEWING = "interviewing"
    OFFER = "offer"
    OFFERED = "offered"
    OFFER_MADE = "offer_made"
    HIRED = "hired"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


# Statuses counted as "offer extended" by analytics
OFFER_STATUSES = {
    ApplicationStatus.OFFER.value,
    ApplicationStatus.OFFERED.value,
    ApplicationStatus.OFFER_MADE.value,
}


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(GUID, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    resume_url = Column(String(500), nullable=True)
    cover_letter = Column(Text, nullable=True)

    # Where the candidate came from: careers-site, linkedin, referral, ...
    source = Column(String(100), nullable=False, default="careers-site", index=True)
    status = Column(String(30), nullable=False, default=ApplicationStatus.APPLIED.value, index=True)

    is_referral = Column(Boolean, nullable=False, default=False)
    referred_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    hired_at = Column(DateTime, nullable=True)

    job = relationship("Job", lazy="selectin")
    interviews = relationship(
        "Interview",
        back_populates="application",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="Interview.stage_order",
    )

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @property
    def candidate_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Interview(Base):
    __tablename__ = "interviews"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    application_id = Column(GUID, ForeignKey("job_applications.id", ondelete="CASCADE"), nullable=False, index=True)

    # Free-form stage label as configured per company, e.g. "stage-1" or "Interview - Technical"
    stage = Column(String(100), nullable=False)
    stage_order = Column(Integer, nullable=False, default=1)
    interview_process_id = Column(
        GUID, ForeignKey("interview_processes.id", ondelete="SET NULL"), nullable=True, index=True
    )

    interviewer_name = Column(String(255), nullable=False)
    interviewer_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    scheduled_date = Column(DateTime, nullable=False, index=True)
    duration_minutes = Column(Integer, nullable=True)

    score = Column(Float, nullable=True)  # 0-10
    outcome = Column(String(10), nullable=True)  # pass | fail
    feedback_rating = Column(String(30), nullable=True)  # Strong Yes | Yes | No | Strong No

    application = relationship("JobApplication", back_populates="interviews")

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
