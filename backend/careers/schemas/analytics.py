"""Recruiting analytics response schemas."""
import datetime as dt
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class AnalyticsPeriod(BaseModel):
    start_date: dt.date
    end_date: dt.date


# ============================================================
# DASHBOARD
# ============================================================

class KpiMetric(BaseModel):
    key: str
    label: str
    value: float
    previous_value: float
    change: float  # percent change against the comparison period
    trend: Literal["up", "down", "flat"]
    format: Literal["number", "percent", "days"] = "number"


class TrendPoint(BaseModel):
    date: dt.date
    applications: int
    hires: int


class JobSummary(BaseModel):
    id: UUID
    title: str
    applications: int
    hires: int
    conversion_rate: float


class SourceSummary(BaseModel):
    source: str
    applications: int
    hires: int
    conversion_rate: float


class DashboardAnalytics(BaseModel):
    period: AnalyticsPeriod
    comparison_period: AnalyticsPeriod
    kpis: list[KpiMetric]
    application_trend: list[TrendPoint]
    top_jobs: list[JobSummary]
    source_effectiveness: list[SourceSummary]


# ============================================================
# FUNNEL
# ============================================================

class FunnelStage(BaseModel):
    stage: str
    count: int
    conversion_rate: float


class DepartmentFunnel(BaseModel):
    department: str
    applications: int
    interviews: int
    hires: int
    conversion_rate: float


class FunnelAnalytics(BaseModel):
    period: AnalyticsPeriod
    stages: list[FunnelStage]
    department_breakdown: list[DepartmentFunnel]
    avg_time_to_hire: Optional[float] = None
    overall_conversion_rate: float


# ============================================================
# JOBS
# ============================================================

class JobPerformance(BaseModel):
    id: UUID
    title: str
    department: str
    location: Optional[str] = None
    status: str
    applications: int
    interviews: int
    offers: int
    hires: int
    conversion_rate: float
    time_to_fill: Optional[float] = None


class GroupPerformance(BaseModel):
    name: str
    openings: int
    applications: int
    hires: int
    conversion_rate: float
    avg_time_to_fill: Optional[float] = None


class MonthlyTrend(BaseModel):
    month: str  # YYYY-MM
    applications: int
    hires: int


class JobsAnalytics(BaseModel):
    period: AnalyticsPeriod
    jobs: list[JobPerformance]
    department_performance: list[GroupPerformance]
    location_performance: list[GroupPerformance]
    monthly_trends: list[MonthlyTrend]


# ============================================================
# INTERVIEWS
# ============================================================

class InterviewerMetric(BaseModel):
    interviewer: str
    interviews: int
    pass_rate: float
    avg_score: Optional[float] = None
    avg_duration: Optional[float] = None


class InterviewStageMetric(BaseModel):
    stage: str
    interviews: int
    pass_rate: float
    avg_duration: Optional[float] = None


class RatingCount(BaseModel):
    rating: str
    count: int


class InterviewMonth(BaseModel):
    month: str
    interviews: int
    pass_rate: float


class InterviewAnalytics(BaseModel):
    period: AnalyticsPeriod
    total_interviews: int
    pass_rate: float
    avg_score: Optional[float] = None
    avg_duration: Optional[float] = None
    interviewers: list[InterviewerMetric]
    stages: list[InterviewStageMetric]
    feedback_distribution: list[RatingCount]
    monthly_trends: list[InterviewMonth]


# ============================================================
# SOURCES
# ============================================================

class SourcePerformance(BaseModel):
    source: str
    applications: int
    qualified: int  # reached at least one interview
    hires: int
    qualified_rate: float
    conversion_rate: float


class SourceMonth(BaseModel):
    month: str
    counts: dict[str, int] = Field(default_factory=dict)


class SourceAnalytics(BaseModel):
    period: AnalyticsPeriod
    sources: list[SourcePerformance]
    monthly_trends: list[SourceMonth]
