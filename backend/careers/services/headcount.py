"""
Headcount approval workflow.

Managers request headcount; admins and directors approve or reject pending
requests; an approved request can be turned into exactly one job opening,
which starts out already approved.
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.database_types import utcnow
from careers.models.headcount_request import HeadcountRequest, HeadcountStatus
from careers.models.job import Job
from careers.models.user import User, UserRole
from careers.schemas.headcount import HeadcountJobCreate
from careers.schemas.job import JobCreate
from careers.services.jobs import create_job

logger = logging.getLogger(__name__)

# Roles that see every request of the company rather than only their own
SEE_ALL_ROLES = (UserRole.ADMIN, UserRole.DIRECTOR, UserRole.RECRUITER)


class HeadcountPermissionError(Exception):
    """Raised when the user may not perform the action on this request"""
    pass


def can_see_all(user: User) -> bool:
    return user.role in SEE_ALL_ROLES


def visible_requests_query(user: User):
    query = select(HeadcountRequest).where(HeadcountRequest.company_id == user.company_id)
    if not can_see_all(user):
        query = query.where(HeadcountRequest.requested_by == user.id)
    return query.order_by(HeadcountRequest.created_at.desc())


async def list_requests(db: AsyncSession, user: User, status: Optional[str] = None) -> List[HeadcountRequest]:
    query = visible_requests_query(user)
    if status:
        query = query.where(HeadcountRequest.status == status)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_request(db: AsyncSession, user: User, request_id: UUID) -> Optional[HeadcountRequest]:
    result = await db.execute(
        visible_requests_query(user).where(HeadcountRequest.id == request_id)
    )
    return result.scalar_one_or_none()


def ensure_editable(user: User, request: HeadcountRequest) -> None:
    """Only pending requests can change, and only by their requester or an approver."""
    if request.status != HeadcountStatus.PENDING.value:
        raise HeadcountPermissionError(f"Headcount request is already {request.status}")
    if request.requested_by != user.id and not user.is_approver():
        raise HeadcountPermissionError("Only the requester or an approver can change this request")


async def review_request(
    db: AsyncSession,
    user: User,
    request: HeadcountRequest,
    approve: bool,
    review_notes: Optional[str] = None,
) -> HeadcountRequest:
    """
    Approve or reject a pending request.

    Raises:
        HeadcountPermissionError: If the user is not an approver or the request is not pending
    """
    if not user.is_approver():
        raise HeadcountPermissionError("Only admins and directors can review headcount requests")
    if request.status != HeadcountStatus.PENDING.value:
        raise HeadcountPermissionError(
            f"Only pending requests can be reviewed, this one is {request.status}"
        )

    request.status = (HeadcountStatus.APPROVED if approve else HeadcountStatus.REJECTED).value
    request.reviewed_by = user.id
    request.reviewed_at = utcnow()
    request.review_notes = review_notes

    await db.commit()
    await db.refresh(request)

    logger.info(f"Headcount request {request.id} {request.status} by {user.email}")
    return request


async def create_job_from_request(
    db: AsyncSession,
    user: User,
    request: HeadcountRequest,
    overrides: HeadcountJobCreate,
) -> Job:
    """
    Open the job an approved request pays for. The job starts approved.

    Raises:
        ValueError: If the request is not approved or already has a job
    """
    if request.status != HeadcountStatus.APPROVED.value:
        raise ValueError("Only approved headcount requests can be turned into jobs")
    if request.job is not None:
        raise ValueError(f"Headcount request already has job {request.job.id}")

    data = JobCreate(
        title=overrides.title or request.role_title,
        location=overrides.location,
        content=overrides.content,
        department_ids=[request.department_id] if request.department_id else [],
        office_ids=overrides.office_ids,
        job_board_id=overrides.job_board_id,
        headcount_request_id=request.id,
    )
    job = await create_job(db, user, data)

    logger.info(f"Created job {job.id} from headcount request {request.id}")
    return job


async def approved_without_jobs(db: AsyncSession, user: User) -> List[HeadcountRequest]:
    requests = await list_requests(db, user, HeadcountStatus.APPROVED.value)
    return [request for request in requests if request.job is None]
