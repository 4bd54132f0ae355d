"""Job function and job role schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class JobFunctionCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)


class JobFunctionUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)


class JobFunctionResponse(BaseModel):
    id: UUID
    title: str
    company_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class JobFunctionSummary(BaseModel):
    id: UUID
    title: str

    model_config = ConfigDict(from_attributes=True)


class JobRoleCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    job_function_id: UUID


class JobRoleUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    job_function_id: Optional[UUID] = None


class JobRoleSummary(BaseModel):
    id: UUID
    title: str
    job_function_id: UUID

    model_config = ConfigDict(from_attributes=True)


class JobRoleResponse(JobRoleSummary):
    company_id: UUID
    job_function: Optional[JobFunctionSummary] = None
    created_at: datetime
    updated_at: datetime
