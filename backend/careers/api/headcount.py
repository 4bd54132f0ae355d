"""
Headcount request endpoints.

Managers see their own requests; admins, directors and recruiters see all
requests of the company. Only admins and directors review.
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user, require_roles
from careers.api.scoping import get_owned_or_404
from careers.api.user_logs import ActivityLog, get_activity_log
from careers.database import get_db
from careers.models.department import Department
from careers.models.headcount_request import HeadcountRequest, HeadcountStatus
from careers.models.user import User, UserRole
from careers.schemas.headcount import (
    HeadcountCreate,
    HeadcountJobCreate,
    HeadcountResponse,
    HeadcountReview,
    HeadcountUpdate,
)
from careers.schemas.job import JobResponse
from careers.services import headcount as headcount_service
from careers.services.headcount import HeadcountPermissionError
from careers.services.jobs import RelatedObjectError
from careers.services.notifications import notify_headcount_requested

logger = logging.getLogger(__name__)
router = APIRouter()

require_job_opener = require_roles(UserRole.ADMIN, UserRole.DIRECTOR, UserRole.RECRUITER, UserRole.MANAGER)


async def _load_request(db: AsyncSession, user: User, request_id: UUID) -> HeadcountRequest:
    request = await headcount_service.get_request(db, user, request_id)
    if not request:
        raise HTTPException(status_code=404, detail=f"Headcount request {request_id} not found")
    return request


@router.get("", response_model=list[HeadcountResponse])
async def list_headcount_requests(
    status: Optional[HeadcountStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await headcount_service.list_requests(db, current_user, status.value if status else None)


@router.get("/approved-without-jobs", response_model=list[HeadcountResponse])
async def list_approved_without_jobs(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Approved requests that have no job opening yet."""
    return await headcount_service.approved_without_jobs(db, current_user)


@router.get("/{request_id}", response_model=HeadcountResponse)
async def get_headcount_request(
    request_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await _load_request(db, current_user, request_id)


@router.post("", response_model=HeadcountResponse, status_code=201)
async def create_headcount_request(
    data: HeadcountCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if data.department_id:
        await get_owned_or_404(db, Department, data.department_id, current_user, "Department")

    request = HeadcountRequest(
        company_id=current_user.company_id,
        requested_by=current_user.id,
        status=HeadcountStatus.PENDING.value,
        **data.model_dump(),
    )
    db.add(request)
    await db.flush()
    await notify_headcount_requested(db, request, current_user)
    await db.commit()
    await db.refresh(request)

    logger.info(f"Headcount request {request.id} ({request.role_title}) created by {current_user.email}")
    return request


@router.patch("/{request_id}", response_model=HeadcountResponse)
async def update_headcount_request(
    request_id: UUID,
    data: HeadcountUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Edit a pending request (requester or approver only)."""
    request = await _load_request(db, current_user, request_id)
    try:
        headcount_service.ensure_editable(current_user, request)
    except HeadcountPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    fields = data.model_dump(exclude_unset=True)
    if fields.get("department_id"):
        await get_owned_or_404(db, Department, fields["department_id"], current_user, "Department")
    if "role_title" in fields and fields["role_title"] is None:
        fields.pop("role_title")

    for field, value in fields.items():
        setattr(request, field, value)

    await db.commit()
    await db.refresh(request)
    return request


@router.delete("/{request_id}", status_code=204)
async def delete_headcount_request(
    request_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    request = await _load_request(db, current_user, request_id)
    try:
        headcount_service.ensure_editable(current_user, request)
    except HeadcountPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    await db.delete(request)
    await db.commit()
    logger.info(f"Deleted headcount request {request_id}")


@router.post("/{request_id}/approve", response_model=HeadcountResponse)
async def approve_headcount_request(
    request_id: UUID,
    review: Optional[HeadcountReview] = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    activity: ActivityLog = Depends(get_activity_log)
):
    request = await _load_request(db, current_user, request_id)
    try:
        request = await headcount_service.review_request(
            db, current_user, request, approve=True, review_notes=review.review_notes if review else None
        )
    except HeadcountPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    await activity.log("approve", "headcount_request", request.id)
    return request


@router.post("/{request_id}/reject", response_model=HeadcountResponse)
async def reject_headcount_request(
    request_id: UUID,
    review: Optional[HeadcountReview] = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    activity: ActivityLog = Depends(get_activity_log)
):
    request = await _load_request(db, current_user, request_id)
    try:
        request = await headcount_service.review_request(
            db, current_user, request, approve=False, review_notes=review.review_notes if review else None
        )
    except HeadcountPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    await activity.log("reject", "headcount_request", request.id)
    return request


@router.post("/{request_id}/create-job", response_model=JobResponse, status_code=201)
async def create_job_from_headcount(
    request_id: UUID,
    overrides: Optional[HeadcountJobCreate] = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_job_opener)
):
    """Open the (already approved) job for an approved request."""
    request = await _load_request(db, current_user, request_id)
    try:
        return await headcount_service.create_job_from_request(
            db, current_user, request, overrides or HeadcountJobCreate()
        )
    except RelatedObjectError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
