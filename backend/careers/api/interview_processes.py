"""
Interview process endpoints.

A process belongs to a job role and lists the rounds candidates for that
role go through. Scheduling an interview can point at a process stage.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user, require_roles
from careers.api.scoping import get_owned_or_404
from careers.api.user_logs import ActivityLog, get_activity_log
from careers.database import get_db
from careers.models.interview_process import InterviewProcess
from careers.models.job_function import JobRole
from careers.models.user import User, UserRole
from careers.schemas.interview_process import (
    InterviewProcessCreate,
    InterviewProcessResponse,
    InterviewProcessUpdate,
)
from careers.services.interview_processes import order_stages, processes_for_role

logger = logging.getLogger(__name__)
router = APIRouter()

RESOURCE = "interview_process"

require_process_editor = require_roles(UserRole.ADMIN, UserRole.DIRECTOR, UserRole.RECRUITER)


@router.get("", response_model=list[InterviewProcessResponse])
async def list_interview_processes(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    result = await db.execute(
        select(InterviewProcess)
        .where(InterviewProcess.company_id == current_user.company_id)
        .order_by(InterviewProcess.created_at.desc())
    )
    return result.scalars().all()


@router.get("/job-role/{job_role_id}", response_model=list[InterviewProcessResponse])
async def list_processes_for_job_role(
    job_role_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await get_owned_or_404(db, JobRole, job_role_id, current_user, "Job role")
    return await processes_for_role(db, current_user.company_id, job_role_id)


@router.get("/{process_id}", response_model=InterviewProcessResponse)
async def get_interview_process(
    process_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await get_owned_or_404(db, InterviewProcess, process_id, current_user, "Interview process")


@router.post("", response_model=InterviewProcessResponse, status_code=201)
async def create_interview_process(
    data: InterviewProcessCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_process_editor),
    activity: ActivityLog = Depends(get_activity_log)
):
    await get_owned_or_404(db, JobRole, data.job_role_id, current_user, "Job role")

    process = InterviewProcess(
        company_id=current_user.company_id,
        job_role_id=data.job_role_id,
        stages=order_stages(data.stages),
        created_by_id=current_user.id,
    )
    db.add(process)
    await db.commit()
    await db.refresh(process)

    await activity.log("create", RESOURCE, process.id, {"job_role_id": str(process.job_role_id)})
    logger.info(f"Interview process {process.id} with {len(process.stages)} stages created by {current_user.email}")
    return process


@router.put("/{process_id}", response_model=InterviewProcessResponse)
async def update_interview_process(
    process_id: UUID,
    data: InterviewProcessUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_process_editor),
    activity: ActivityLog = Depends(get_activity_log)
):
    process = await get_owned_or_404(db, InterviewProcess, process_id, current_user, "Interview process")

    if data.job_role_id is not None:
        await get_owned_or_404(db, JobRole, data.job_role_id, current_user, "Job role")
        process.job_role_id = data.job_role_id
    if data.stages is not None:
        process.stages = order_stages(data.stages)

    await db.commit()
    await db.refresh(process)

    await activity.log("update", RESOURCE, process.id, data.model_dump(mode="json", exclude_unset=True))
    return process


@router.delete("/{process_id}", status_code=204)
async def delete_interview_process(
    process_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_process_editor),
    activity: ActivityLog = Depends(get_activity_log)
):
    """Delete a process. Interviews scheduled from it keep their stage labels."""
    process = await get_owned_or_404(db, InterviewProcess, process_id, current_user, "Interview process")
    await db.delete(process)
    await db.commit()
    await activity.log("delete", RESOURCE, process_id)
