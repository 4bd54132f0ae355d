"""Department schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from careers.schemas.job_function import JobRoleSummary


class DepartmentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    parent_department_id: Optional[UUID] = None
    approval_role: Optional[str] = None
    job_role_ids: list[UUID] = Field(default_factory=list)


class DepartmentUpdate(BaseModel):
    """Partial update. Send parent_department_id=null to detach from the parent."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    parent_department_id: Optional[UUID] = None
    approval_role: Optional[str] = None
    job_role_ids: Optional[list[UUID]] = None


class DepartmentSummary(BaseModel):
    id: UUID
    title: str

    model_config = ConfigDict(from_attributes=True)


class DepartmentResponse(DepartmentSummary):
    description: Optional[str] = None
    parent_department_id: Optional[UUID] = None
    approval_role: Optional[str] = None
    job_roles: list[JobRoleSummary] = Field(default_factory=list)
    company_id: UUID
    created_at: datetime
    updated_at: datetime


class DepartmentNode(BaseModel):
    """A department with its sub-departments, as returned by the hierarchy endpoint."""
    id: UUID
    title: str
    description: Optional[str] = None
    parent_department_id: Optional[UUID] = None
    children: list[DepartmentNode] = Field(default_factory=list)
