"""Interview process schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from careers.models.interview_process import DEFAULT_STAGE_MINUTES


class Consideration(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""


class InterviewStageDefinition(BaseModel):
    """One round of an interview process. Durations are in 15 minute slots."""
    title: str = Field(min_length=1, max_length=100)
    description: str = ""
    considerations: list[Consideration] = Field(default_factory=list)
    email_template: str = ""
    order: Optional[int] = Field(default=None, ge=0)
    duration_minutes: int = Field(default=DEFAULT_STAGE_MINUTES, ge=15, le=480)

    @field_validator("duration_minutes")
    @classmethod
    def quarter_hours(cls, value: int) -> int:
        if value % 15:
            raise ValueError("duration_minutes must be a multiple of 15")
        return value


class InterviewProcessCreate(BaseModel):
    job_role_id: UUID
    stages: list[InterviewStageDefinition] = Field(min_length=1)


class InterviewProcessUpdate(BaseModel):
    job_role_id: Optional[UUID] = None
    stages: Optional[list[InterviewStageDefinition]] = Field(default=None, min_length=1)


class JobRoleRef(BaseModel):
    id: UUID
    title: str

    model_config = ConfigDict(from_attributes=True)


class CreatorRef(BaseModel):
    id: UUID
    full_name: Optional[str] = None
    email: str

    model_config = ConfigDict(from_attributes=True)


class InterviewStageResponse(InterviewStageDefinition):
    order: int


class InterviewProcessResponse(BaseModel):
    id: UUID
    company_id: UUID
    job_role_id: UUID
    job_role: Optional[JobRoleRef] = None
    stages: list[InterviewStageResponse]
    created_by: Optional[CreatorRef] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
