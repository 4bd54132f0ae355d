"""
Approval workflow for job openings.
ALL job status changes must go through this module.
"""
import logging
from typing import Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from careers.database_types import utcnow
from careers.models.job import Job, JobStatus

logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS: Dict[JobStatus, list[JobStatus]] = {
    JobStatus.DRAFT: [JobStatus.PENDING_APPROVAL, JobStatus.ARCHIVED],
    JobStatus.PENDING_APPROVAL: [JobStatus.APPROVED, JobStatus.REJECTED],
    JobStatus.APPROVED: [JobStatus.PUBLISHED, JobStatus.ARCHIVED],
    JobStatus.REJECTED: [JobStatus.PENDING_APPROVAL],  # Resubmit after edits
    JobStatus.PUBLISHED: [JobStatus.ARCHIVED],
    JobStatus.ARCHIVED: [],  # Terminal state
}


class InvalidTransitionError(Exception):
    """Raised when a job status change is not allowed from its current status"""
    pass


def can_transition(from_status: JobStatus, to_status: JobStatus) -> bool:
    """Check if a transition is allowed without touching the database"""
    return to_status in ALLOWED_TRANSITIONS.get(from_status, [])


def apply_transition(
    job: Job,
    to_status: JobStatus,
    actor_id: Optional[UUID] = None,
    rejection_reason: Optional[str] = None,
) -> JobStatus:
    """
    Validate and apply a status change in memory. The caller commits.

    Returns the previous status.

    Raises:
        InvalidTransitionError: If the transition is not allowed
        ValueError: If rejecting without a reason
    """
    current = JobStatus(job.status)

    if not can_transition(current, to_status):
        raise InvalidTransitionError(
            f"Cannot move job from {current.value} to {to_status.value}"
        )

    now = utcnow()

    if to_status == JobStatus.REJECTED:
        if not rejection_reason or not rejection_reason.strip():
            raise ValueError("A rejection reason is required")
        job.rejected_by = actor_id
        job.rejected_at = now
        job.rejection_reason = rejection_reason.strip()

    if to_status == JobStatus.PENDING_APPROVAL:
        # A resubmitted job starts a fresh review
        job.rejected_by = None
        job.rejected_at = None
        job.rejection_reason = None

    if to_status == JobStatus.APPROVED:
        job.approved_by = actor_id
        job.approved_at = now

    if to_status == JobStatus.PUBLISHED:
        job.published_date = now

    job.status = to_status.value
    job.last_status_change_at = now
    return current


async def transition_job(
    db: AsyncSession,
    job: Job,
    to_status: JobStatus,
    actor_id: Optional[UUID] = None,
    rejection_reason: Optional[str] = None,
) -> Job:
    """
    Move a job to a new status with validation and persist it.

    Args:
        db: Database session
        job: Job to transition (already scoped to the caller's company)
        to_status: Target status
        actor_id: User performing the change (recorded for approve/reject)
        rejection_reason: Required when rejecting

    Raises:
        InvalidTransitionError: If the transition is not allowed
        ValueError: If rejecting without a reason
    """
    previous = apply_transition(job, to_status, actor_id, rejection_reason)

    await db.commit()
    await db.refresh(job)

    logger.info(
        f"Job status transition: {previous.value} → {to_status.value}",
        extra={"job_id": str(job.id), "actor_id": str(actor_id) if actor_id else None},
    )

    return job
