"""
Candidate applications and their interviews.
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user
from careers.api.scoping import get_owned_or_404
from careers.database import get_db
from careers.database_types import utcnow
from careers.models.job import Job
from careers.models.interview_process import InterviewProcess
from careers.models.job_application import ApplicationStatus, Interview, JobApplication
from careers.models.user import User
from careers.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    InterviewCreate,
    InterviewResponse,
)
from careers.services.notifications import notify_interview_scheduled, notify_new_application

logger = logging.getLogger(__name__)
router = APIRouter()

# Statuses that move to "interviewing" once an interview is scheduled
PRE_INTERVIEW_STATUSES = {ApplicationStatus.APPLIED.value, ApplicationStatus.SCREENING.value}


@router.get("", response_model=list[ApplicationResponse])
async def list_applications(
    job_id: Optional[UUID] = Query(None),
    status: Optional[ApplicationStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    query = select(JobApplication).where(JobApplication.company_id == current_user.company_id)
    if job_id:
        query = query.where(JobApplication.job_id == job_id)
    if status:
        query = query.where(JobApplication.status == status.value)
    result = await db.execute(query.order_by(JobApplication.created_at.desc()))
    return result.scalars().all()


@router.post("", response_model=ApplicationResponse, status_code=201)
async def create_application(
    data: ApplicationCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Record an application entered by the team (e.g. a referral)."""
    job = await get_owned_or_404(db, Job, data.job_id, current_user, "Job")

    fields = data.model_dump()
    if fields["is_referral"] and fields["referred_by"] is None:
        fields["referred_by"] = current_user.id

    application = JobApplication(company_id=current_user.company_id, **fields)
    db.add(application)
    await db.flush()
    await notify_new_application(db, application, job, created_by=current_user.id)
    await db.commit()
    await db.refresh(application)

    logger.info(f"Application {application.id} for job {application.job_id} created by {current_user.email}")
    return application


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await get_owned_or_404(db, JobApplication, application_id, current_user, "Application")


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: UUID,
    data: ApplicationStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Move a candidate through the pipeline. Hiring stamps hired_at."""
    application = await get_owned_or_404(db, JobApplication, application_id, current_user, "Application")

    application.status = data.status.value
    if data.status == ApplicationStatus.HIRED:
        application.hired_at = application.hired_at or utcnow()
    else:
        application.hired_at = None

    await db.commit()
    await db.refresh(application)

    logger.info(f"Application {application.id} moved to {application.status}")
    return application


@router.post("/{application_id}/interviews", response_model=InterviewResponse, status_code=201)
async def schedule_interview(
    application_id: UUID,
    data: InterviewCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    application = await get_owned_or_404(db, JobApplication, application_id, current_user, "Application")
    if data.interviewer_id:
        await get_owned_or_404(db, User, data.interviewer_id, current_user, "Interviewer")

    fields = data.model_dump()
    if data.interview_process_id:
        process = await get_owned_or_404(
            db, InterviewProcess, data.interview_process_id, current_user, "Interview process"
        )
        try:
            process_stage = process.stage_at(data.stage_order)
        except IndexError:
            raise HTTPException(
                status_code=400,
                detail=f"Interview process {process.id} has no stage {data.stage_order}"
            )
        fields["stage"] = fields["stage"] or process_stage["title"]
        fields["duration_minutes"] = fields["duration_minutes"] or process_stage.get("duration_minutes")

    interview = Interview(company_id=current_user.company_id, **fields)
    application.interviews.append(interview)
    if application.status in PRE_INTERVIEW_STATUSES:
        application.status = ApplicationStatus.INTERVIEWING.value

    await db.flush()
    notify_interview_scheduled(db, interview, application, current_user)
    await db.commit()
    await db.refresh(interview)

    logger.info(f"Scheduled {interview.stage} interview for application {application.id}")
    return interview
