"""
Job opening endpoints and the approval workflow actions.
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user, require_approver, require_roles
from careers.api.scoping import get_owned_or_404
from careers.api.user_logs import ActivityLog, get_activity_log
from careers.database import get_db
from careers.models.department import Department
from careers.models.job import Job, JobStatus, job_departments, job_offices
from careers.models.job_board import JobBoard
from careers.models.office import Office
from careers.models.user import User, UserRole
from careers.schemas.job import JobCreate, JobRejectRequest, JobResponse, JobUpdate
from careers.services import jobs as job_service
from careers.services.job_workflow import InvalidTransitionError, transition_job

logger = logging.getLogger(__name__)
router = APIRouter()

require_editor = require_roles(UserRole.ADMIN, UserRole.DIRECTOR, UserRole.RECRUITER, UserRole.MANAGER)
require_publisher = require_roles(UserRole.ADMIN, UserRole.DIRECTOR, UserRole.RECRUITER)

WORKFLOW_ACTIONS = {
    JobStatus.PENDING_APPROVAL: "submit",
    JobStatus.APPROVED: "approve",
    JobStatus.REJECTED: "reject",
    JobStatus.PUBLISHED: "publish",
    JobStatus.ARCHIVED: "archive",
}


async def _load_job(db: AsyncSession, job_id: UUID, user: User) -> Job:
    job = await job_service.get_job(db, user.company_id, job_id)
    if not job:
        raise HTTPException(status_code=404, detail=f"Job {job_id} not found")
    return job


async def _transition(
    db: AsyncSession,
    job: Job,
    to_status: JobStatus,
    user: User,
    activity: ActivityLog,
    rejection_reason: Optional[str] = None,
) -> Job:
    try:
        job = await transition_job(db, job, to_status, actor_id=user.id, rejection_reason=rejection_reason)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    details = {"rejection_reason": rejection_reason} if rejection_reason else None
    await activity.log(WORKFLOW_ACTIONS[to_status], "job", job.id, details)
    return job


def _company_jobs(user: User):
    return select(Job).where(Job.company_id == user.company_id)


# ============================================================
# LISTINGS
# ============================================================

@router.get("", response_model=list[JobResponse])
async def list_jobs(
    status: Optional[JobStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """All jobs of the company, newest first, optionally filtered by status."""
    query = _company_jobs(current_user)
    if status:
        query = query.where(Job.status == status.value)
    result = await db.execute(query.order_by(Job.created_at.desc()))
    return result.scalars().all()


@router.get("/pending-approval", response_model=list[JobResponse])
@router.get("/for-approval", response_model=list[JobResponse], include_in_schema=False)
async def list_jobs_pending_approval(
    db: AsyncSession = Depends(get_db),
    approver: User = Depends(require_approver)
):
    """Jobs waiting for an approval decision, oldest first."""
    result = await db.execute(
        _company_jobs(approver)
        .where(Job.status == JobStatus.PENDING_APPROVAL.value)
        .order_by(Job.updated_at)
    )
    return result.scalars().all()


@router.get("/department/{department_id}", response_model=list[JobResponse])
async def list_jobs_by_department(
    department_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await get_owned_or_404(db, Department, department_id, current_user, "Department")
    result = await db.execute(
        _company_jobs(current_user)
        .join(job_departments, job_departments.c.job_id == Job.id)
        .where(job_departments.c.department_id == department_id)
        .order_by(Job.created_at.desc())
    )
    return result.scalars().all()


@router.get("/office/{office_id}", response_model=list[JobResponse])
async def list_jobs_by_office(
    office_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await get_owned_or_404(db, Office, office_id, current_user, "Office")
    result = await db.execute(
        _company_jobs(current_user)
        .join(job_offices, job_offices.c.job_id == Job.id)
        .where(job_offices.c.office_id == office_id)
        .order_by(Job.created_at.desc())
    )
    return result.scalars().all()


@router.get("/job-board/{job_board_id}", response_model=list[JobResponse])
async def list_jobs_by_job_board(
    job_board_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await get_owned_or_404(db, JobBoard, job_board_id, current_user, "Job board")
    result = await db.execute(
        _company_jobs(current_user)
        .where(Job.job_board_id == job_board_id)
        .order_by(Job.created_at.desc())
    )
    return result.scalars().all()


# ============================================================
# CRUD
# ============================================================

@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    data: JobCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor),
    activity: ActivityLog = Depends(get_activity_log)
):
    """Create a draft job (or an approved one when opened against approved headcount)."""
    try:
        job = await job_service.create_job(db, current_user, data)
    except job_service.RelatedObjectError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await activity.log("create", "job", job.id, {"title": job.title})
    return job


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await _load_job(db, job_id, current_user)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: UUID,
    data: JobUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor),
    activity: ActivityLog = Depends(get_activity_log)
):
    """Update job fields. Archived jobs are read-only."""
    job = await _load_job(db, job_id, current_user)
    if job.status == JobStatus.ARCHIVED.value:
        raise HTTPException(status_code=409, detail="Archived jobs cannot be edited")
    try:
        job = await job_service.update_job(db, job, data)
    except job_service.RelatedObjectError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await activity.log("update", "job", job.id, {"fields": sorted(data.model_dump(exclude_unset=True))})
    return job


@router.delete("/{job_id}", status_code=204)
async def delete_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor),
    activity: ActivityLog = Depends(get_activity_log)
):
    """Delete a job. Published jobs must be archived first."""
    job = await _load_job(db, job_id, current_user)
    if job.status == JobStatus.PUBLISHED.value:
        raise HTTPException(status_code=409, detail="Archive the job before deleting it")

    await db.delete(job)
    await db.commit()
    await activity.log("delete", "job", job_id, {"title": job.title})
    logger.info(f"Deleted job {job_id}")


# ============================================================
# WORKFLOW
# ============================================================

@router.put("/{job_id}/submit-for-approval", response_model=JobResponse)
async def submit_job_for_approval(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_editor),
    activity: ActivityLog = Depends(get_activity_log)
):
    job = await _load_job(db, job_id, current_user)
    return await _transition(db, job, JobStatus.PENDING_APPROVAL, current_user, activity)


@router.put("/{job_id}/approve", response_model=JobResponse)
async def approve_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    approver: User = Depends(require_approver),
    activity: ActivityLog = Depends(get_activity_log)
):
    job = await _load_job(db, job_id, approver)
    return await _transition(db, job, JobStatus.APPROVED, approver, activity)


@router.put("/{job_id}/reject", response_model=JobResponse)
async def reject_job(
    job_id: UUID,
    data: JobRejectRequest,
    db: AsyncSession = Depends(get_db),
    approver: User = Depends(require_approver),
    activity: ActivityLog = Depends(get_activity_log)
):
    job = await _load_job(db, job_id, approver)
    return await _transition(db, job, JobStatus.REJECTED, approver, activity, data.rejection_reason)


@router.put("/{job_id}/publish", response_model=JobResponse)
async def publish_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_publisher),
    activity: ActivityLog = Depends(get_activity_log)
):
    job = await _load_job(db, job_id, current_user)
    return await _transition(db, job, JobStatus.PUBLISHED, current_user, activity)


@router.put("/{job_id}/archive", response_model=JobResponse)
async def archive_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_publisher),
    activity: ActivityLog = Depends(get_activity_log)
):
    job = await _load_job(db, job_id, current_user)
    return await _transition(db, job, JobStatus.ARCHIVED, current_user, activity)
