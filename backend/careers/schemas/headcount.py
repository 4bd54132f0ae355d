"""Headcount request schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from careers.models.headcount_request import HeadcountStatus


class HeadcountCreate(BaseModel):
    role_title: str = Field(min_length=1, max_length=255)
    department_id: Optional[UUID] = None
    team_name: Optional[str] = None
    reason: Optional[str] = None


class HeadcountUpdate(BaseModel):
    role_title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    department_id: Optional[UUID] = None
    team_name: Optional[str] = None
    reason: Optional[str] = None


class HeadcountReview(BaseModel):
    review_notes: Optional[str] = None


class HeadcountJobCreate(BaseModel):
    """Optional overrides when turning an approved request into a job."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    location: Optional[str] = None
    content: Optional[str] = None
    office_ids: list[UUID] = Field(default_factory=list)
    job_board_id: Optional[UUID] = None


class HeadcountResponse(BaseModel):
    id: UUID
    company_id: UUID
    role_title: str
    department_id: Optional[UUID] = None
    team_name: Optional[str] = None
    reason: Optional[str] = None
    status: HeadcountStatus
    requested_by: Optional[UUID] = None
    reviewed_by: Optional[UUID] = None
    review_notes: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    job_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
