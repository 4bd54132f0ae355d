"""Job opening schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from careers.models.job import JobStatus
from careers.schemas.department import DepartmentSummary
from careers.schemas.office import OfficeSummary


class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    internal_id: Optional[str] = Field(default=None, max_length=100)
    location: Optional[str] = None
    content: Optional[str] = None
    department_ids: list[UUID] = Field(default_factory=list)
    office_ids: list[UUID] = Field(default_factory=list)
    job_board_id: Optional[UUID] = None
    headcount_request_id: Optional[UUID] = None


class JobUpdate(BaseModel):
    """Partial update of job fields. Status changes go through the workflow endpoints."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    internal_id: Optional[str] = Field(default=None, max_length=100)
    location: Optional[str] = None
    content: Optional[str] = None
    department_ids: Optional[list[UUID]] = None
    office_ids: Optional[list[UUID]] = None
    job_board_id: Optional[UUID] = None


class JobRejectRequest(BaseModel):
    rejection_reason: str = Field(min_length=1)


class JobResponse(BaseModel):
    id: UUID
    company_id: UUID
    internal_id: Optional[str] = None
    title: str
    location: Optional[str] = None
    content: Optional[str] = None
    status: JobStatus
    job_board_id: Optional[UUID] = None
    headcount_request_id: Optional[UUID] = None
    external_id: Optional[str] = None
    departments: list[DepartmentSummary] = Field(default_factory=list)
    offices: list[OfficeSummary] = Field(default_factory=list)
    created_by: Optional[UUID] = None
    approved_by: Optional[UUID] = None
    approved_at: Optional[datetime] = None
    rejected_by: Optional[UUID] = None
    rejected_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    published_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PublicJobResponse(BaseModel):
    """Job as shown on the careers site."""
    id: UUID
    title: str
    location: Optional[str] = None
    content: Optional[str] = None
    job_board_id: Optional[UUID] = None
    departments: list[DepartmentSummary] = Field(default_factory=list)
    offices: list[OfficeSummary] = Field(default_factory=list)
    published_date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
