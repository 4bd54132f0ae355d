"""
Audit log endpoints (admin only) and the per-request activity recorder.

Routers that change company data take `activity: ActivityLog =
Depends(get_activity_log)` and call `await activity.log(...)` once the
change is committed.
"""
import logging
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_client_ip, get_current_user, require_admin
from careers.database import get_db
from careers.models.user import User
from careers.models.user_log import UserLog
from careers.schemas.user_log import UserLogPage, UserLogResponse
from careers.services.user_logs import page_of_logs, record_action

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_PAGE_SIZE = 100


class ActivityLog:
    """Writes audit entries for the current user of a request."""

    def __init__(self, request: Request, db: AsyncSession, user: User):
        self.request = request
        self.db = db
        self.user = user

    async def log(
        self,
        action: str,
        resource_type: str,
        resource_id: Optional[Any] = None,
        details: Optional[dict] = None,
    ) -> UserLog:
        entry = record_action(
            self.db,
            self.user,
            action,
            resource_type,
            resource_id,
            details,
            ip_address=get_client_ip(self.request),
            user_agent=self.request.headers.get("user-agent"),
        )
        await self.db.commit()
        return entry


async def get_activity_log(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> ActivityLog:
    return ActivityLog(request, db, current_user)


def _company_logs(user: User):
    return select(UserLog).where(UserLog.company_id == user.company_id)


@router.get("", response_model=UserLogPage)
async def list_user_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Company audit trail, newest first."""
    logs, total = await page_of_logs(db, _company_logs(admin), page, limit)
    return UserLogPage(logs=[UserLogResponse.model_validate(log) for log in logs], total=total)


@router.get("/user/{user_id}", response_model=list[UserLogResponse])
async def list_logs_for_user(
    user_id: UUID,
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    logs, _ = await page_of_logs(db, _company_logs(admin).where(UserLog.user_id == user_id), 1, limit)
    return logs


@router.get("/resource/{resource_type}/{resource_id}", response_model=list[UserLogResponse])
async def list_logs_for_resource(
    resource_type: str,
    resource_id: str,
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    query = _company_logs(admin).where(
        UserLog.resource_type == resource_type,
        UserLog.resource_id == resource_id,
    )
    logs, _ = await page_of_logs(db, query, 1, limit)
    return logs
