"""
Home dashboard statistics for the admin console.
"""
import logging
from datetime import timedelta
from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from careers.database_types import utcnow
from careers.models.headcount_request import HeadcountRequest, HeadcountStatus
from careers.models.job import Job, JobStatus
from careers.models.job_application import Interview, JobApplication
from careers.models.user import User
from careers.schemas.dashboard import (
    ActivityItem,
    CandidateSummary,
    DashboardStats,
    HeadcountSummary,
    InterviewSummary,
    StatCard,
)
from careers.services.headcount import visible_requests_query

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5
NEW_CANDIDATE_DAYS = 7


def stat_card(total: int, last_day: int, day_before: int) -> StatCard:
    change = last_day - day_before
    return StatCard(
        total=total,
        change=change,
        change_type="increase" if change >= 0 else "decrease",
    )


async def _count(db: AsyncSession, query) -> int:
    result = await db.execute(query)
    return result.scalar_one() or 0


def _candidate(application: JobApplication) -> CandidateSummary:
    return CandidateSummary(
        id=application.id,
        name=application.candidate_name,
        email=application.email,
        job_title=application.job.title if application.job else "",
        source=application.source,
        status=application.status,
        created_at=application.created_at,
    )


async def get_dashboard_stats(db: AsyncSession, user: User) -> DashboardStats:
    """
    Totals with day-over-day change plus the lists shown on the home page.

    Changes compare the last 24 hours with the 24 hours before that.
    """
    company_id = user.company_id
    now = utcnow()
    day_ago = now - timedelta(days=1)
    two_days_ago = now - timedelta(days=2)

    async def created_between(model, start, end, *conditions) -> int:
        return await _count(db, select(func.count(model.id)).where(
            model.company_id == company_id, model.created_at >= start, model.created_at < end, *conditions
        ))

    # Interviews
    interviews_total = await _count(db, select(func.count(Interview.id)).where(Interview.company_id == company_id))
    interviews = stat_card(
        interviews_total,
        await created_between(Interview, day_ago, now),
        await created_between(Interview, two_days_ago, day_ago),
    )

    # Jobs (currently published)
    published = Job.status == JobStatus.PUBLISHED.value
    jobs_total = await _count(db, select(func.count(Job.id)).where(Job.company_id == company_id, published))
    jobs = stat_card(
        jobs_total,
        await created_between(Job, day_ago, now, published),
        await created_between(Job, two_days_ago, day_ago, published),
    )

    # Applications
    applications_total = await _count(
        db, select(func.count(JobApplication.id)).where(JobApplication.company_id == company_id)
    )
    applications = stat_card(
        applications_total,
        await created_between(JobApplication, day_ago, now),
        await created_between(JobApplication, two_days_ago, day_ago),
    )

    # Referrals
    is_referral = JobApplication.is_referral.is_(True)
    referrals_total = await _count(db, select(func.count(JobApplication.id)).where(
        JobApplication.company_id == company_id, is_referral
    ))
    referrals = stat_card(
        referrals_total,
        await created_between(JobApplication, day_ago, now, is_referral),
        await created_between(JobApplication, two_days_ago, day_ago, is_referral),
    )

    # Pending headcount requests visible to this user
    result = await db.execute(
        visible_requests_query(user)
        .where(HeadcountRequest.status == HeadcountStatus.PENDING.value)
        .limit(RECENT_LIMIT)
    )
    headcount_requests = [
        HeadcountSummary(
            id=r.id,
            role_title=r.role_title,
            team_name=r.team_name,
            status=r.status,
            requested_by=r.requested_by,
            created_at=r.created_at,
        )
        for r in result.scalars().all()
    ]

    # New candidates (last week)
    result = await db.execute(
        select(JobApplication)
        .where(
            JobApplication.company_id == company_id,
            JobApplication.created_at >= now - timedelta(days=NEW_CANDIDATE_DAYS),
        )
        .order_by(JobApplication.created_at.desc())
        .limit(RECENT_LIMIT)
    )
    new_candidates = [_candidate(a) for a in result.scalars().all()]

    # Candidates this user referred
    result = await db.execute(
        select(JobApplication)
        .where(JobApplication.company_id == company_id, JobApplication.referred_by == user.id)
        .order_by(JobApplication.created_at.desc())
        .limit(RECENT_LIMIT)
    )
    user_referrals = [_candidate(a) for a in result.scalars().all()]

    # Upcoming interviews this user conducts
    result = await db.execute(
        select(Interview)
        .options(selectinload(Interview.application))
        .where(
            Interview.company_id == company_id,
            Interview.interviewer_id == user.id,
            Interview.scheduled_date >= now,
        )
        .order_by(Interview.scheduled_date)
        .limit(RECENT_LIMIT)
    )
    user_interviews = [
        InterviewSummary(
            id=i.id,
            candidate_name=i.application.candidate_name,
            job_title=i.application.job.title if i.application.job else "",
            stage=i.stage,
            scheduled_date=i.scheduled_date,
        )
        for i in result.scalars().all()
    ]

    return DashboardStats(
        interviews=interviews,
        jobs=jobs,
        applications=applications,
        referrals=referrals,
        recent_activity=await recent_activity(db, company_id),
        headcount_requests=headcount_requests,
        new_candidates=new_candidates,
        user_referrals=user_referrals,
        user_interviews=user_interviews,
    )


async def recent_activity(db: AsyncSession, company_id) -> List[ActivityItem]:
    """Latest applications, job changes and headcount requests, newest first."""
    items: List[ActivityItem] = []

    result = await db.execute(
        select(JobApplication)
        .where(JobApplication.company_id == company_id)
        .order_by(JobApplication.created_at.desc())
        .limit(RECENT_LIMIT)
    )
    for application in result.scalars().all():
        items.append(ActivityItem(
            type="application",
            title="New application",
            description=f"{application.candidate_name} applied for {application.job.title if application.job else 'a job'}",
            timestamp=application.created_at,
        ))

    result = await db.execute(
        select(Job)
        .where(Job.company_id == company_id)
        .order_by(Job.updated_at.desc())
        .limit(RECENT_LIMIT)
    )
    for job in result.scalars().all():
        items.append(ActivityItem(
            type="job",
            title=f"Job {job.status.replace('_', ' ')}",
            description=job.title,
            timestamp=job.last_status_change_at or job.updated_at,
        ))

    result = await db.execute(
        select(HeadcountRequest)
        .where(HeadcountRequest.company_id == company_id)
        .order_by(HeadcountRequest.updated_at.desc())
        .limit(RECENT_LIMIT)
    )
    for request in result.scalars().all():
        items.append(ActivityItem(
            type="headcount",
            title=f"Headcount request {request.status}",
            description=request.role_title,
            timestamp=request.reviewed_at or request.created_at,
        ))

    items.sort(key=lambda item: item.timestamp, reverse=True)
    return items[:RECENT_LIMIT * 2]
