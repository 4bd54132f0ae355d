import uuid

from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Table
from sqlalchemy.orm import relationship

from careers.database import Base
from careers.database_types import GUID, utcnow


department_job_roles = Table(
    "department_job_roles",
    Base.metadata,
    Column("department_id", GUID, ForeignKey("departments.id", ondelete="CASCADE"), primary_key=True),
    Column("job_role_id", GUID, ForeignKey("job_roles.id", ondelete="CASCADE"), primary_key=True),
)


class Department(Base):
    __tablename__ = "departments"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Self-referencing tree; cycles are rejected by the departments service
    parent_department_id = Column(GUID, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True)

    # Role whose members approve openings in this department (e.g. "director")
    approval_role = Column(String(50), nullable=True)

    job_roles = relationship("JobRole", secondary=department_job_roles, lazy="selectin")

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
