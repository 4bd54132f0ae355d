"""
In-app notifications for console users.

Generated inside the transaction of the event they report: a new
application notifies the job's creator and the hiring manager who
requested its headcount, a scheduled interview notifies the interviewer.
Nobody is notified of their own action.
"""
import logging
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.headcount_request import HeadcountRequest
from careers.models.job import Job
from careers.models.job_application import Interview, JobApplication
from careers.models.notification import Notification, NotificationType
from careers.models.user import APPROVER_ROLES, User

logger = logging.getLogger(__name__)


def notify_users(
    db: AsyncSession,
    company_id: UUID,
    user_ids: Iterable[Optional[UUID]],
    title: str,
    message: str,
    notification_type: NotificationType,
    data: Optional[dict] = None,
    created_by: Optional[UUID] = None,
) -> List[Notification]:
    """One notification per distinct recipient; missing ids are skipped."""
    notifications = []
    seen = set()
    for user_id in user_ids:
        if user_id is None or user_id in seen:
            continue
        seen.add(user_id)
        notification = Notification(
            company_id=company_id,
            user_id=user_id,
            title=title,
            message=message,
            type=notification_type.value,
            read=False,
            data=data,
            created_by=created_by,
        )
        db.add(notification)
        notifications.append(notification)
    return notifications


async def hiring_manager_id(db: AsyncSession, job: Job) -> Optional[UUID]:
    if job.headcount_request_id is None:
        return None
    result = await db.execute(
        select(HeadcountRequest.requested_by).where(HeadcountRequest.id == job.headcount_request_id)
    )
    return result.scalar_one_or_none()


async def notify_new_application(
    db: AsyncSession,
    application: JobApplication,
    job: Job,
    created_by: Optional[UUID] = None,
) -> List[Notification]:
    recipients = [
        user_id for user_id in (job.created_by, await hiring_manager_id(db, job))
        if user_id != created_by
    ]
    notifications = notify_users(
        db,
        job.company_id,
        recipients,
        title="New Job Application",
        message=f"{application.candidate_name} has applied for the {job.title} position.",
        notification_type=NotificationType.JOB_APPLICATION,
        data={"job_id": str(job.id), "application_id": str(application.id), "job_title": job.title},
        created_by=created_by,
    )
    if notifications:
        logger.info(f"Notified {len(notifications)} user(s) of application {application.id}")
    return notifications


def notify_interview_scheduled(
    db: AsyncSession,
    interview: Interview,
    application: JobApplication,
    scheduled_by: User,
) -> List[Notification]:
    """The interviewer hears about rounds other people put on their calendar."""
    if interview.interviewer_id is None or interview.interviewer_id == scheduled_by.id:
        return []
    when = interview.scheduled_date.strftime("%Y-%m-%d %H:%M")
    return notify_users(
        db,
        application.company_id,
        [interview.interviewer_id],
        title="Interview Scheduled",
        message=f"You are interviewing {application.candidate_name} ({interview.stage}) on {when} UTC.",
        notification_type=NotificationType.INTERVIEW_SCHEDULED,
        data={
            "application_id": str(application.id),
            "job_id": str(application.job_id),
            "interview_id": str(interview.id),
        },
        created_by=scheduled_by.id,
    )


async def notify_headcount_requested(
    db: AsyncSession,
    request: HeadcountRequest,
    requester: User,
) -> List[Notification]:
    """Admins and directors of the company review new headcount."""
    result = await db.execute(
        select(User.id).where(
            User.company_id == request.company_id,
            User.role.in_(APPROVER_ROLES),
            User.id != requester.id,
        )
    )
    return notify_users(
        db,
        request.company_id,
        result.scalars().all(),
        title="Headcount Request",
        message=f"{requester.full_name or requester.email} requested headcount for {request.role_title}.",
        notification_type=NotificationType.HEADCOUNT_REQUEST,
        data={"headcount_request_id": str(request.id)},
        created_by=requester.id,
    )
