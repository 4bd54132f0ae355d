"""Admin home dashboard schemas."""
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class StatCard(BaseModel):
    total: int
    change: int  # last 24h against the 24h before
    change_type: Literal["increase", "decrease"]


class ActivityItem(BaseModel):
    type: Literal["application", "job", "headcount", "interview"]
    title: str
    description: str
    timestamp: datetime


class HeadcountSummary(BaseModel):
    id: UUID
    role_title: str
    team_name: Optional[str] = None
    status: str
    requested_by: Optional[UUID] = None
    created_at: datetime


class CandidateSummary(BaseModel):
    id: UUID
    name: str
    email: str
    job_title: str
    source: str
    status: str
    created_at: datetime


class InterviewSummary(BaseModel):
    id: UUID
    candidate_name: str
    job_title: str
    stage: str
    scheduled_date: datetime


class DashboardStats(BaseModel):
    interviews: StatCard
    jobs: StatCard
    applications: StatCard
    referrals: StatCard
    recent_activity: list[ActivityItem] = Field(default_factory=list)
    headcount_requests: list[HeadcountSummary] = Field(default_factory=list)
    new_candidates: list[CandidateSummary] = Field(default_factory=list)
    user_referrals: list[CandidateSummary] = Field(default_factory=list)
    user_interviews: list[InterviewSummary] = Field(default_factory=list)
