import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from careers.database import Base
from careers.database_types import GUID, utcnow


DEFAULT_JOB_FUNCTIONS = [
    "Engineering",
    "Marketing",
    "Sales",
    "Product",
    "Design",
    "Operations",
    "Human Resources",
    "Finance",
]


class JobFunction(Base):
    __tablename__ = "job_functions"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class JobRole(Base):
    __tablename__ = "job_roles"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    job_function_id = Column(GUID, ForeignKey("job_functions.id", ondelete="CASCADE"), nullable=False, index=True)

    job_function = relationship("JobFunction", lazy="selectin")

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
