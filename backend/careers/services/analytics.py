"""
Recruiting analytics.

Applications are selected by creation date and interviews by scheduled date
within the requested period, then narrowed by the optional department, job,
location and source filters. All aggregation happens here; the admin client
only sorts and reshapes the results.
"""
import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, model_validator
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from careers.models.job import Job, JobStatus
from careers.models.job_application import (
    ApplicationStatus,
    Interview,
    JobApplication,
    OFFER_STATUSES,
)
from careers.schemas.analytics import (
    AnalyticsPeriod,
    DashboardAnalytics,
    DepartmentFunnel,
    FunnelAnalytics,
    FunnelStage,
    GroupPerformance,
    InterviewAnalytics,
    InterviewerMetric,
    InterviewMonth,
    InterviewStageMetric,
    JobPerformance,
    JobsAnalytics,
    JobSummary,
    KpiMetric,
    MonthlyTrend,
    RatingCount,
    SourceAnalytics,
    SourceMonth,
    SourcePerformance,
    SourceSummary,
    TrendPoint,
)

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_DAYS = 30
UNASSIGNED_DEPARTMENT = "Unassigned"
UNSPECIFIED_LOCATION = "Unspecified"
FEEDBACK_RATINGS = ["Strong Yes", "Yes", "No", "Strong No"]

HIRED = ApplicationStatus.HIRED.value
INTERVIEW_STATUSES = {ApplicationStatus.INTERVIEWING.value, HIRED} | OFFER_STATUSES


class AnalyticsFilters(BaseModel):
    """Query filters shared by every analytics endpoint."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    department: Optional[UUID] = None
    job_id: Optional[UUID] = None
    location: Optional[str] = None
    source: Optional[str] = None
    comparison_period: Literal["previous_period", "previous_year"] = "previous_period"

    @model_validator(mode="after")
    def default_period(self):
        if self.end_date is None:
            self.end_date = date.today()
        if self.start_date is None:
            self.start_date = self.end_date - timedelta(days=DEFAULT_PERIOD_DAYS)
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self

    @property
    def period(self) -> AnalyticsPeriod:
        return AnalyticsPeriod(start_date=self.start_date, end_date=self.end_date)

    def bounds(self):
        """Inclusive start and exclusive end as datetimes."""
        return (
            datetime.combine(self.start_date, time.min),
            datetime.combine(self.end_date + timedelta(days=1), time.min),
        )

    def comparison(self) -> "AnalyticsFilters":
        """The same filters over the period to compare against."""
        if self.comparison_period == "previous_year":
            shift = timedelta(days=365)
            start, end = self.start_date - shift, self.end_date - shift
        else:
            length = (self.end_date - self.start_date).days + 1
            end = self.start_date - timedelta(days=1)
            start = end - timedelta(days=length - 1)
        return self.model_copy(update={"start_date": start, "end_date": end})


# ============================================================
# HELPERS
# ============================================================

def _rate(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return round(numerator / denominator * 100, 1)


def _avg(values: Iterable[Optional[float]]) -> Optional[float]:
    present = [v for v in values if v is not None]
    if not present:
        return None
    return round(sum(present) / len(present), 1)


def _change(current: float, previous: float) -> float:
    if not previous:
        return 100.0 if current else 0.0
    return round((current - previous) / previous * 100, 1)


def _trend(current: float, previous: float) -> str:
    if current > previous:
        return "up"
    if current < previous:
        return "down"
    return "flat"


def _month(value: datetime) -> str:
    return value.strftime("%Y-%m")


def department_name(job: Optional[Job]) -> str:
    if job is None or not job.departments:
        return UNASSIGNED_DEPARTMENT
    return job.departments[0].title


def is_hired(application: JobApplication) -> bool:
    return application.status == HIRED


def reached_offer(application: JobApplication) -> bool:
    return application.status in OFFER_STATUSES or application.status == HIRED


def reached_interview(application: JobApplication) -> bool:
    return bool(application.interviews) or application.status in INTERVIEW_STATUSES


def days_to_hire(application: JobApplication) -> Optional[float]:
    if not is_hired(application) or application.hired_at is None:
        return None
    return (application.hired_at - application.created_at).total_seconds() / 86400


def _job_matches(job: Optional[Job], filters: AnalyticsFilters) -> bool:
    if job is None:
        return False
    if filters.job_id and job.id != filters.job_id:
        return False
    if filters.department and filters.department not in {d.id for d in job.departments}:
        return False
    if filters.location and (job.location or "").lower() != filters.location.lower():
        return False
    return True


async def load_applications(
    db: AsyncSession,
    company_id: UUID,
    filters: AnalyticsFilters,
) -> List[JobApplication]:
    start, end = filters.bounds()
    query = select(JobApplication).where(
        JobApplication.company_id == company_id,
        JobApplication.created_at >= start,
        JobApplication.created_at < end,
    )
    if filters.source:
        query = query.where(JobApplication.source == filters.source)
    if filters.job_id:
        query = query.where(JobApplication.job_id == filters.job_id)
    result = await db.execute(query.order_by(JobApplication.created_at))
    return [a for a in result.scalars().all() if _job_matches(a.job, filters)]


async def load_interviews(
    db: AsyncSession,
    company_id: UUID,
    filters: AnalyticsFilters,
) -> List[Interview]:
    start, end = filters.bounds()
    result = await db.execute(
        select(Interview)
        .options(selectinload(Interview.application))
        .where(
            Interview.company_id == company_id,
            Interview.scheduled_date >= start,
            Interview.scheduled_date < end,
        )
        .order_by(Interview.scheduled_date)
    )
    interviews = []
    for interview in result.scalars().all():
        application = interview.application
        if filters.source and application.source != filters.source:
            continue
        if _job_matches(application.job, filters):
            interviews.append(interview)
    return interviews


async def load_jobs(db: AsyncSession, company_id: UUID, filters: AnalyticsFilters) -> List[Job]:
    query = select(Job).where(Job.company_id == company_id, Job.status != JobStatus.DRAFT.value)
    if filters.job_id:
        query = query.where(Job.id == filters.job_id)
    result = await db.execute(query.order_by(Job.title))
    return [job for job in result.scalars().all() if _job_matches(job, filters)]


def _kpi(key: str, label: str, current: float, previous: float, fmt: str = "number") -> KpiMetric:
    return KpiMetric(
        key=key,
        label=label,
        value=round(current, 1),
        previous_value=round(previous, 1),
        change=_change(current, previous),
        trend=_trend(current, previous),
        format=fmt,
    )


def _summary_numbers(applications: List[JobApplication], interviews: List[Interview]) -> Dict[str, float]:
    hires = [a for a in applications if is_hired(a)]
    return {
        "applications": len(applications),
        "interviews": len(interviews),
        "offers": sum(1 for a in applications if reached_offer(a)),
        "hires": len(hires),
        "time_to_hire": _avg(days_to_hire(a) for a in hires) or 0.0,
        "conversion_rate": _rate(len(hires), len(applications)),
    }


# ============================================================
# DASHBOARD
# ============================================================

async def dashboard_analytics(db: AsyncSession, company_id: UUID, filters: AnalyticsFilters) -> DashboardAnalytics:
    comparison = filters.comparison()
    applications = await load_applications(db, company_id, filters)
    current = _summary_numbers(applications, await load_interviews(db, company_id, filters))
    previous = _summary_numbers(
        await load_applications(db, company_id, comparison),
        await load_interviews(db, company_id, comparison),
    )

    kpis = [
        _kpi("applications", "Total Applications", current["applications"], previous["applications"]),
        _kpi("interviews", "Interviews", current["interviews"], previous["interviews"]),
        _kpi("offers", "Offers Extended", current["offers"], previous["offers"]),
        _kpi("hires", "Hires", current["hires"], previous["hires"]),
        _kpi("time_to_hire", "Avg. Time to Hire", current["time_to_hire"], previous["time_to_hire"], "days"),
        _kpi("conversion_rate", "Conversion Rate", current["conversion_rate"], previous["conversion_rate"], "percent"),
    ]

    per_day_apps: Dict[date, int] = defaultdict(int)
    per_day_hires: Dict[date, int] = defaultdict(int)
    for application in applications:
        per_day_apps[application.created_at.date()] += 1
        if is_hired(application) and application.hired_at:
            per_day_hires[application.hired_at.date()] += 1

    trend = []
    day = filters.start_date
    while day <= filters.end_date:
        trend.append(TrendPoint(date=day, applications=per_day_apps[day], hires=per_day_hires[day]))
        day += timedelta(days=1)

    by_job: Dict[UUID, List[JobApplication]] = defaultdict(list)
    for application in applications:
        by_job[application.job_id].append(application)
    top_jobs = [
        JobSummary(
            id=job_id,
            title=apps[0].job.title,
            applications=len(apps),
            hires=sum(1 for a in apps if is_hired(a)),
            conversion_rate=_rate(sum(1 for a in apps if is_hired(a)), len(apps)),
        )
        for job_id, apps in by_job.items()
    ]
    top_jobs.sort(key=lambda j: (-j.applications, j.title))

    return DashboardAnalytics(
        period=filters.period,
        comparison_period=comparison.period,
        kpis=kpis,
        application_trend=trend,
        top_jobs=top_jobs[:5],
        source_effectiveness=[
            SourceSummary(
                source=s.source,
                applications=s.applications,
                hires=s.hires,
                conversion_rate=s.conversion_rate,
            )
            for s in _source_performance(applications)
        ],
    )


# ============================================================
# FUNNEL
# ============================================================

async def funnel_analytics(db: AsyncSession, company_id: UUID, filters: AnalyticsFilters) -> FunnelAnalytics:
    """
    Stage counts in pipeline order: Applications, one entry per interview
    stage label (as configured by the company), Offer, Hired.

    Interview stages are reported under their raw labels; the admin console
    folds them into a single Interview step for display.
    """
    applications = await load_applications(db, company_id, filters)

    stage_order: Dict[str, int] = {}
    stage_candidates: Dict[str, set] = defaultdict(set)
    for application in applications:
        for interview in application.interviews:
            stage_order[interview.stage] = min(stage_order.get(interview.stage, interview.stage_order), interview.stage_order)
            stage_candidates[interview.stage].add(application.id)

    counts = [("Applications", len(applications))]
    for stage in sorted(stage_order, key=lambda s: (stage_order[s], s)):
        counts.append((stage, len(stage_candidates[stage])))
    counts.append(("Offer", sum(1 for a in applications if reached_offer(a))))
    counts.append(("Hired", sum(1 for a in applications if is_hired(a))))

    stages = []
    for idx, (stage, count) in enumerate(counts):
        rate = 100.0 if idx == 0 else _rate(count, counts[idx - 1][1])
        stages.append(FunnelStage(stage=stage, count=count, conversion_rate=rate))

    by_department: Dict[str, List[JobApplication]] = defaultdict(list)
    for application in applications:
        by_department[department_name(application.job)].append(application)
    breakdown = [
        DepartmentFunnel(
            department=name,
            applications=len(apps),
            interviews=sum(1 for a in apps if reached_interview(a)),
            hires=sum(1 for a in apps if is_hired(a)),
            conversion_rate=_rate(sum(1 for a in apps if is_hired(a)), len(apps)),
        )
        for name, apps in sorted(by_department.items())
    ]

    hires = [a for a in applications if is_hired(a)]
    return FunnelAnalytics(
        period=filters.period,
        stages=stages,
        department_breakdown=breakdown,
        avg_time_to_hire=_avg(days_to_hire(a) for a in hires),
        overall_conversion_rate=_rate(len(hires), len(applications)),
    )


# ============================================================
# JOBS
# ============================================================

def _time_to_fill(job: Job, applications: List[JobApplication]) -> Optional[float]:
    hired_at = [a.hired_at for a in applications if is_hired(a) and a.hired_at]
    if not hired_at:
        return None
    opened = job.published_date or job.created_at
    return round(max((min(hired_at) - opened).total_seconds() / 86400, 0), 1)


def _group_performance(groups: Dict[str, List[JobPerformance]]) -> List[GroupPerformance]:
    rows = []
    for name, jobs in groups.items():
        applications = sum(j.applications for j in jobs)
        hires = sum(j.hires for j in jobs)
        rows.append(GroupPerformance(
            name=name,
            openings=sum(1 for j in jobs if j.status == JobStatus.PUBLISHED.value),
            applications=applications,
            hires=hires,
            conversion_rate=_rate(hires, applications),
            avg_time_to_fill=_avg(j.time_to_fill for j in jobs),
        ))
    rows.sort(key=lambda r: (-r.applications, r.name))
    return rows


async def jobs_analytics(db: AsyncSession, company_id: UUID, filters: AnalyticsFilters) -> JobsAnalytics:
    jobs = await load_jobs(db, company_id, filters)
    applications = await load_applications(db, company_id, filters)

    by_job: Dict[UUID, List[JobApplication]] = defaultdict(list)
    for application in applications:
        by_job[application.job_id].append(application)

    performance = []
    for job in jobs:
        apps = by_job.get(job.id, [])
        hires = sum(1 for a in apps if is_hired(a))
        performance.append(JobPerformance(
            id=job.id,
            title=job.title,
            department=department_name(job),
            location=job.location,
            status=job.status,
            applications=len(apps),
            interviews=sum(len(a.interviews) for a in apps),
            offers=sum(1 for a in apps if reached_offer(a)),
            hires=hires,
            conversion_rate=_rate(hires, len(apps)),
            time_to_fill=_time_to_fill(job, apps),
        ))

    by_department: Dict[str, List[JobPerformance]] = defaultdict(list)
    by_location: Dict[str, List[JobPerformance]] = defaultdict(list)
    for row in performance:
        by_department[row.department].append(row)
        by_location[row.location or UNSPECIFIED_LOCATION].append(row)

    months: Dict[str, Dict[str, int]] = defaultdict(lambda: {"applications": 0, "hires": 0})
    for application in applications:
        months[_month(application.created_at)]["applications"] += 1
        if is_hired(application) and application.hired_at:
            months[_month(application.hired_at)]["hires"] += 1

    return JobsAnalytics(
        period=filters.period,
        jobs=performance,
        department_performance=_group_performance(by_department),
        location_performance=_group_performance(by_location),
        monthly_trends=[
            MonthlyTrend(month=month, **values) for month, values in sorted(months.items())
        ],
    )


# ============================================================
# INTERVIEWS
# ============================================================

def _pass_rate(interviews: List[Interview]) -> float:
    decided = [i for i in interviews if i.outcome]
    return _rate(sum(1 for i in decided if i.outcome == "pass"), len(decided))


async def interview_analytics(db: AsyncSession, company_id: UUID, filters: AnalyticsFilters) -> InterviewAnalytics:
    interviews = await load_interviews(db, company_id, filters)

    by_interviewer: Dict[str, List[Interview]] = defaultdict(list)
    by_stage: Dict[str, List[Interview]] = defaultdict(list)
    by_month: Dict[str, List[Interview]] = defaultdict(list)
    ratings: Dict[str, int] = defaultdict(int)
    for interview in interviews:
        by_interviewer[interview.interviewer_name].append(interview)
        by_stage[interview.stage].append(interview)
        by_month[_month(interview.scheduled_date)].append(interview)
        if interview.feedback_rating:
            ratings[interview.feedback_rating] += 1

    interviewers = [
        InterviewerMetric(
            interviewer=name,
            interviews=len(items),
            pass_rate=_pass_rate(items),
            avg_score=_avg(i.score for i in items),
            avg_duration=_avg(i.duration_minutes for i in items),
        )
        for name, items in by_interviewer.items()
    ]
    interviewers.sort(key=lambda m: (-m.interviews, m.interviewer))

    stages = [
        InterviewStageMetric(
            stage=stage,
            interviews=len(items),
            pass_rate=_pass_rate(items),
            avg_duration=_avg(i.duration_minutes for i in items),
        )
        for stage, items in sorted(by_stage.items(), key=lambda kv: (min(i.stage_order for i in kv[1]), kv[0]))
    ]

    known = [r for r in FEEDBACK_RATINGS if r in ratings]
    others = sorted(r for r in ratings if r not in FEEDBACK_RATINGS)

    return InterviewAnalytics(
        period=filters.period,
        total_interviews=len(interviews),
        pass_rate=_pass_rate(interviews),
        avg_score=_avg(i.score for i in interviews),
        avg_duration=_avg(i.duration_minutes for i in interviews),
        interviewers=interviewers,
        stages=stages,
        feedback_distribution=[RatingCount(rating=r, count=ratings[r]) for r in known + others],
        monthly_trends=[
            InterviewMonth(month=month, interviews=len(items), pass_rate=_pass_rate(items))
            for month, items in sorted(by_month.items())
        ],
    )


# ============================================================
# SOURCES
# ============================================================

def _source_performance(applications: List[JobApplication]) -> List[SourcePerformance]:
    by_source: Dict[str, List[JobApplication]] = defaultdict(list)
    for application in applications:
        by_source[application.source].append(application)

    rows = []
    for source, apps in by_source.items():
        qualified = sum(1 for a in apps if reached_interview(a))
        hires = sum(1 for a in apps if is_hired(a))
        rows.append(SourcePerformance(
            source=source,
            applications=len(apps),
            qualified=qualified,
            hires=hires,
            qualified_rate=_rate(qualified, len(apps)),
            conversion_rate=_rate(hires, len(apps)),
        ))
    rows.sort(key=lambda r: (-r.applications, r.source))
    return rows


async def source_analytics(db: AsyncSession, company_id: UUID, filters: AnalyticsFilters) -> SourceAnalytics:
    applications = await load_applications(db, company_id, filters)

    months: Dict[str, Dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for application in applications:
        months[_month(application.created_at)][application.source] += 1

    return SourceAnalytics(
        period=filters.period,
        sources=_source_performance(applications),
        monthly_trends=[
            SourceMonth(month=month, counts=dict(counts)) for month, counts in sorted(months.items())
        ],
    )
