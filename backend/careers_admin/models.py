"""Response models mirrored from the careers API."""
from datetime import date, datetime
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    """Tolerates fields the client does not know about yet."""
    model_config = ConfigDict(extra="ignore")


# ============================================================
# AUTH / USERS
# ============================================================

class MagicLinkResponse(ApiModel):
    message: str
    email: str


class AuthResponse(ApiModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    company_id: str
    email: str
    full_name: Optional[str] = None
    role: str


class User(ApiModel):
    id: UUID
    email: str
    full_name: Optional[str] = None
    role: str
    company_id: UUID
    last_login_at: Optional[datetime] = None
    created_at: datetime


# ============================================================
# COMPANY STRUCTURE
# ============================================================

class CompanyValue(ApiModel):
    text: str
    icon: Optional[str] = None


class CompanySettings(ApiModel):
    approval_type: Literal["headcount", "job-opening"] = "headcount"
    email_calendar_provider: Literal["google", "microsoft", "other"] = "other"


class Company(ApiModel):
    id: UUID
    name: str
    logo: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    founded_year: Optional[int] = None
    size: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    slogan: Optional[str] = None
    mission: Optional[str] = None
    vision: Optional[str] = None
    values: list[CompanyValue] = Field(default_factory=list)
    social_links: dict[str, Optional[str]] = Field(default_factory=dict)
    settings: CompanySettings = Field(default_factory=CompanySettings)
    allowed_domains: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class Office(ApiModel):
    id: UUID
    name: str
    address: str
    is_main: bool = False
    company_id: UUID


class JobFunction(ApiModel):
    id: UUID
    title: str
    company_id: UUID


class JobRole(ApiModel):
    id: UUID
    title: str
    job_function_id: UUID
    company_id: UUID
    job_function: Optional[dict[str, Any]] = None


class Department(ApiModel):
    id: UUID
    title: str
    description: Optional[str] = None
    parent_department_id: Optional[UUID] = None
    approval_role: Optional[str] = None
    job_roles: list[dict[str, Any]] = Field(default_factory=list)
    company_id: UUID


class DepartmentNode(ApiModel):
    id: UUID
    title: str
    description: Optional[str] = None
    parent_department_id: Optional[UUID] = None
    children: list["DepartmentNode"] = Field(default_factory=list)


# ============================================================
# JOBS
# ============================================================

class NamedRef(ApiModel):
    id: UUID
    title: Optional[str] = None
    name: Optional[str] = None


class Job(ApiModel):
    id: UUID
    company_id: UUID
    internal_id: Optional[str] = None
    title: str
    location: Optional[str] = None
    content: Optional[str] = None
    status: str
    job_board_id: Optional[UUID] = None
    headcount_request_id: Optional[UUID] = None
    external_id: Optional[str] = None
    departments: list[NamedRef] = Field(default_factory=list)
    offices: list[NamedRef] = Field(default_factory=list)
    created_by: Optional[UUID] = None
    approved_by: Optional[UUID] = None
    approved_at: Optional[datetime] = None
    rejected_by: Optional[UUID] = None
    rejected_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    published_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class JobBoard(ApiModel):
    id: UUID
    company_id: UUID
    title: str
    slug: str
    description: Optional[str] = None
    custom_domain: Optional[str] = None
    is_external: bool = False
    source: str = "custom"
    external_id: Optional[str] = None
    settings: dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True
    last_synced_at: Optional[datetime] = None


class SyncResult(ApiModel):
    job_board_id: UUID
    source: str
    fetched: int
    created: int
    updated: int
    archived: int


class HeadcountRequest(ApiModel):
    id: UUID
    company_id: UUID
    role_title: str
    department_id: Optional[UUID] = None
    team_name: Optional[str] = None
    reason: Optional[str] = None
    status: str
    requested_by: Optional[UUID] = None
    reviewed_by: Optional[UUID] = None
    review_notes: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    job_id: Optional[UUID] = None
    created_at: datetime


class ApiKey(ApiModel):
    id: UUID
    key: str
    secret_key: str  # masked, except right after generation
    name: str
    description: Optional[str] = None
    is_active: bool
    last_used_at: Optional[datetime] = None
    created_at: datetime


# ============================================================
# INTERVIEW PROCESSES AND TEMPLATES
# ============================================================

class Consideration(ApiModel):
    title: str
    description: str = ""


class InterviewStage(ApiModel):
    title: str
    description: str = ""
    considerations: list[Consideration] = Field(default_factory=list)
    email_template: str = ""
    order: int
    duration_minutes: int = 60


class InterviewProcess(ApiModel):
    id: UUID
    company_id: UUID
    job_role_id: UUID
    job_role: Optional[NamedRef] = None
    stages: list[InterviewStage] = Field(default_factory=list)
    created_by: Optional[dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


class JobTemplate(ApiModel):
    id: UUID
    company_id: UUID
    name: str
    content: str
    job_role_id: UUID
    job_role: Optional[NamedRef] = None
    department_id: Optional[UUID] = None
    department: Optional[NamedRef] = None
    created_at: datetime
    updated_at: datetime


# ============================================================
# ACTIVITY
# ============================================================

class UserLog(ApiModel):
    id: UUID
    user_id: Optional[UUID] = None
    user_name: Optional[str] = None
    user_email: str
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime


class UserLogPage(ApiModel):
    logs: list[UserLog] = Field(default_factory=list)
    total: int = 0


class Notification(ApiModel):
    id: UUID
    user_id: UUID
    title: str
    message: str
    type: str
    read: bool = False
    data: Optional[dict[str, Any]] = None
    created_by: Optional[UUID] = None
    created_at: datetime


class NotificationPage(ApiModel):
    notifications: list[Notification] = Field(default_factory=list)
    total: int = 0


# ============================================================
# ANALYTICS
# ============================================================

class AnalyticsPeriod(ApiModel):
    start_date: date
    end_date: date


class KpiMetric(ApiModel):
    key: str
    label: str
    value: float
    previous_value: float
    change: float
    trend: Literal["up", "down", "flat"]
    format: str = "number"


class DashboardAnalytics(ApiModel):
    period: AnalyticsPeriod
    comparison_period: AnalyticsPeriod
    kpis: list[KpiMetric]
    application_trend: list[dict[str, Any]]
    top_jobs: list[dict[str, Any]]
    source_effectiveness: list[dict[str, Any]]


class FunnelStage(ApiModel):
    stage: str
    count: int = 0
    conversion_rate: float = 100.0


class DepartmentFunnel(ApiModel):
    department: str
    applications: int
    interviews: int
    hires: int
    conversion_rate: float


class FunnelAnalytics(ApiModel):
    period: AnalyticsPeriod
    stages: list[FunnelStage]
    department_breakdown: list[DepartmentFunnel]
    avg_time_to_hire: Optional[float] = None
    overall_conversion_rate: float


class JobPerformance(ApiModel):
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


class GroupPerformance(ApiModel):
    name: str
    openings: int
    applications: int
    hires: int
    conversion_rate: float
    avg_time_to_fill: Optional[float] = None


class JobsAnalytics(ApiModel):
    period: AnalyticsPeriod
    jobs: list[JobPerformance]
    department_performance: list[GroupPerformance]
    location_performance: list[GroupPerformance]
    monthly_trends: list[dict[str, Any]]


class InterviewerMetric(ApiModel):
    interviewer: str
    interviews: int
    pass_rate: float
    avg_score: Optional[float] = None
    avg_duration: Optional[float] = None


class InterviewAnalytics(ApiModel):
    period: AnalyticsPeriod
    total_interviews: int
    pass_rate: float
    avg_score: Optional[float] = None
    avg_duration: Optional[float] = None
    interviewers: list[InterviewerMetric]
    stages: list[dict[str, Any]]
    feedback_distribution: list[dict[str, Any]]
    monthly_trends: list[dict[str, Any]]


class SourcePerformance(ApiModel):
    source: str
    applications: int
    qualified: int
    hires: int
    qualified_rate: float
    conversion_rate: float


class SourceAnalytics(ApiModel):
    period: AnalyticsPeriod
    sources: list[SourcePerformance]
    monthly_trends: list[dict[str, Any]]


# ============================================================
# DASHBOARD
# ============================================================

class StatCard(ApiModel):
    total: int
    change: int
    change_type: Literal["increase", "decrease"]


class DashboardStats(ApiModel):
    interviews: StatCard
    jobs: StatCard
    applications: StatCard
    referrals: StatCard
    recent_activity: list[dict[str, Any]] = Field(default_factory=list)
    headcount_requests: list[dict[str, Any]] = Field(default_factory=list)
    new_candidates: list[dict[str, Any]] = Field(default_factory=list)
    user_referrals: list[dict[str, Any]] = Field(default_factory=list)
    user_interviews: list[dict[str, Any]] = Field(default_factory=list)
