"""
Job opening CRUD helpers shared by the jobs and headcount routers.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.database_types import utcnow
from careers.models.department import Department
from careers.models.headcount_request import HeadcountRequest, HeadcountStatus
from careers.models.job import Job, JobStatus
from careers.models.job_board import JobBoard
from careers.models.office import Office
from careers.models.user import User
from careers.schemas.job import JobCreate, JobUpdate
from careers.services.html_content import sanitize_html

logger = logging.getLogger(__name__)


class RelatedObjectError(ValueError):
    """Raised when a referenced department, office or board does not exist in the company"""
    pass


async def resolve_departments(db: AsyncSession, company_id: UUID, ids: List[UUID]) -> List[Department]:
    if not ids:
        return []
    result = await db.execute(
        select(Department).where(Department.company_id == company_id, Department.id.in_(ids))
    )
    departments = list(result.scalars().all())
    if len(departments) != len(set(ids)):
        raise RelatedObjectError("One or more departments were not found")
    return departments


async def resolve_offices(db: AsyncSession, company_id: UUID, ids: List[UUID]) -> List[Office]:
    if not ids:
        return []
    result = await db.execute(
        select(Office).where(Office.company_id == company_id, Office.id.in_(ids))
    )
    offices = list(result.scalars().all())
    if len(offices) != len(set(ids)):
        raise RelatedObjectError("One or more offices were not found")
    return offices


async def ensure_job_board(db: AsyncSession, company_id: UUID, job_board_id: Optional[UUID]) -> None:
    if job_board_id is None:
        return
    result = await db.execute(
        select(JobBoard.id).where(JobBoard.company_id == company_id, JobBoard.id == job_board_id)
    )
    if result.first() is None:
        raise RelatedObjectError(f"Job board {job_board_id} not found")


async def get_job(db: AsyncSession, company_id: UUID, job_id: UUID) -> Optional[Job]:
    result = await db.execute(
        select(Job).where(Job.company_id == company_id, Job.id == job_id)
    )
    return result.scalar_one_or_none()


async def create_job(db: AsyncSession, user: User, data: JobCreate) -> Job:
    """
    Create a job. Content HTML is sanitized.

    Jobs start as drafts, except jobs opened against an approved headcount
    request, which start approved.
    """
    await ensure_job_board(db, user.company_id, data.job_board_id)

    status = JobStatus.DRAFT
    headcount = None
    if data.headcount_request_id is not None:
        result = await db.execute(
            select(HeadcountRequest).where(
                HeadcountRequest.company_id == user.company_id,
                HeadcountRequest.id == data.headcount_request_id,
            )
        )
        headcount = result.scalar_one_or_none()
        if headcount is None:
            raise RelatedObjectError(f"Headcount request {data.headcount_request_id} not found")
        if headcount.status != HeadcountStatus.APPROVED.value or headcount.job is not None:
            raise RelatedObjectError("Headcount request must be approved and not yet used by another job")
        status = JobStatus.APPROVED

    job = Job(
        company_id=user.company_id,
        title=data.title,
        internal_id=data.internal_id,
        location=data.location,
        content=sanitize_html(data.content),
        job_board_id=data.job_board_id,
        headcount_request_id=data.headcount_request_id,
        status=status.value,
        approved_by=headcount.reviewed_by if headcount else None,
        approved_at=(headcount.reviewed_at or utcnow()) if headcount else None,
        created_by=user.id,
        departments=await resolve_departments(db, user.company_id, data.department_ids),
        offices=await resolve_offices(db, user.company_id, data.office_ids),
    )
    db.add(job)
    await db.commit()
    await db.refresh(job)

    logger.info(f"Created job {job.id} ({job.title}) for company {user.company_id}")
    return job


async def update_job(db: AsyncSession, job: Job, data: JobUpdate) -> Job:
    """Apply the fields present in the request. Status is never touched here."""
    fields = data.model_dump(exclude_unset=True)

    if "department_ids" in fields:
        job.departments = await resolve_departments(db, job.company_id, fields.pop("department_ids") or [])
    if "office_ids" in fields:
        job.offices = await resolve_offices(db, job.company_id, fields.pop("office_ids") or [])
    if "job_board_id" in fields:
        await ensure_job_board(db, job.company_id, fields["job_board_id"])
    if "content" in fields:
        fields["content"] = sanitize_html(fields["content"])
    if "title" in fields and fields["title"] is None:
        fields.pop("title")

    for field, value in fields.items():
        setattr(job, field, value)

    await db.commit()
    await db.refresh(job)
    return job
