"""Job application and interview schemas."""
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from careers.models.job_application import ApplicationStatus


class ApplicationCreate(BaseModel):
    job_id: UUID
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    source: str = "careers-site"
    is_referral: bool = False
    referred_by: Optional[UUID] = None


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class InterviewCreate(BaseModel):
    """
    An interview round. With interview_process_id the stage label and default
    duration come from that process's stage number `stage_order`.
    """
    stage: Optional[str] = Field(default=None, min_length=1, max_length=100)
    stage_order: int = Field(default=1, ge=1)
    interview_process_id: Optional[UUID] = None
    interviewer_name: str = Field(min_length=1, max_length=255)
    interviewer_id: Optional[UUID] = None
    scheduled_date: datetime
    duration_minutes: Optional[int] = Field(default=None, ge=1)
    score: Optional[float] = Field(default=None, ge=0, le=10)
    outcome: Optional[Literal["pass", "fail"]] = None
    feedback_rating: Optional[str] = None

    @model_validator(mode="after")
    def stage_or_process(self):
        if self.stage is None and self.interview_process_id is None:
            raise ValueError("Either stage or interview_process_id is required")
        return self


class InterviewResponse(BaseModel):
    id: UUID
    application_id: UUID
    stage: str
    stage_order: int
    interview_process_id: Optional[UUID] = None
    interviewer_name: str
    interviewer_id: Optional[UUID] = None
    scheduled_date: datetime
    duration_minutes: Optional[int] = None
    score: Optional[float] = None
    outcome: Optional[str] = None
    feedback_rating: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApplicationResponse(BaseModel):
    id: UUID
    company_id: UUID
    job_id: UUID
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    resume_url: Optional[str] = None
    source: str
    status: ApplicationStatus
    is_referral: bool
    referred_by: Optional[UUID] = None
    hired_at: Optional[datetime] = None
    interviews: list[InterviewResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PublicApplicationCreate(BaseModel):
    """Application submitted from the careers site."""
    job_id: UUID
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    source: str = "careers-site"


class PublicApplicationResponse(BaseModel):
    id: UUID
    job_id: UUID
    status: ApplicationStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
