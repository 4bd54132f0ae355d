"""Job template schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from careers.schemas.department import DepartmentSummary
from careers.schemas.job_function import JobRoleSummary


class JobTemplateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    job_role_id: UUID
    department_id: Optional[UUID] = None


class JobTemplateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    job_role_id: Optional[UUID] = None
    department_id: Optional[UUID] = None


class JobTemplateResponse(BaseModel):
    id: UUID
    company_id: UUID
    name: str
    content: str
    job_role_id: UUID
    job_role: Optional[JobRoleSummary] = None
    department_id: Optional[UUID] = None
    department: Optional[DepartmentSummary] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
