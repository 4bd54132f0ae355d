"""
Recruiting analytics endpoints.

Every endpoint accepts the same filters: start_date / end_date (default: the
last 30 days), department, job_id, location, source and comparison_period.
"""
from datetime import date
from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user
from careers.database import get_db
from careers.models.user import User
from careers.schemas.analytics import (
    DashboardAnalytics,
    FunnelAnalytics,
    InterviewAnalytics,
    JobsAnalytics,
    SourceAnalytics,
)
from careers.services import analytics as analytics_service
from careers.services.analytics import AnalyticsFilters

router = APIRouter()


def get_filters(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    department: Optional[UUID] = Query(None),
    job_id: Optional[UUID] = Query(None),
    location: Optional[str] = Query(None),
    source: Optional[str] = Query(None),
    comparison_period: Literal["previous_period", "previous_year"] = Query("previous_period"),
) -> AnalyticsFilters:
    try:
        return AnalyticsFilters(
            start_date=start_date,
            end_date=end_date,
            department=department,
            job_id=job_id,
            location=location,
            source=source,
            comparison_period=comparison_period,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors()[0]["msg"])


@router.get("/dashboard", response_model=DashboardAnalytics)
async def get_dashboard_analytics(
    filters: AnalyticsFilters = Depends(get_filters),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """KPIs with comparison, daily application trend, top jobs and sources."""
    return await analytics_service.dashboard_analytics(db, current_user.company_id, filters)


@router.get("/funnel", response_model=FunnelAnalytics)
async def get_funnel_analytics(
    filters: AnalyticsFilters = Depends(get_filters),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await analytics_service.funnel_analytics(db, current_user.company_id, filters)


@router.get("/jobs", response_model=JobsAnalytics)
async def get_jobs_analytics(
    filters: AnalyticsFilters = Depends(get_filters),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await analytics_service.jobs_analytics(db, current_user.company_id, filters)


@router.get("/interviews", response_model=InterviewAnalytics)
async def get_interview_analytics(
    filters: AnalyticsFilters = Depends(get_filters),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await analytics_service.interview_analytics(db, current_user.company_id, filters)


@router.get("/sources", response_model=SourceAnalytics)
async def get_source_analytics(
    filters: AnalyticsFilters = Depends(get_filters),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await analytics_service.source_analytics(db, current_user.company_id, filters)
