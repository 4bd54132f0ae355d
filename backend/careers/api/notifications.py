"""
Notification endpoints. Every route works on the caller's own notifications.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user
from careers.database import get_db
from careers.models.notification import Notification
from careers.models.user import User
from careers.schemas.notification import NotificationPage, NotificationResponse, UnreadCount

logger = logging.getLogger(__name__)
router = APIRouter()


def _own(user: User):
    return Notification.user_id == user.id


async def _load_notification(db: AsyncSession, notification_id: UUID, user: User) -> Notification:
    result = await db.execute(
        select(Notification).where(Notification.id == notification_id, _own(user))
    )
    notification = result.scalar_one_or_none()
    if notification is None:
        raise HTTPException(status_code=404, detail=f"Notification {notification_id} not found")
    return notification


@router.get("", response_model=NotificationPage)
async def list_notifications(
    limit: int = Query(50, ge=1, le=200),
    skip: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """The caller's notifications, newest first."""
    total = (
        await db.execute(select(func.count(Notification.id)).where(_own(current_user)))
    ).scalar_one()
    result = await db.execute(
        select(Notification)
        .where(_own(current_user))
        .order_by(Notification.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    notifications = [NotificationResponse.model_validate(n) for n in result.scalars().all()]
    return NotificationPage(notifications=notifications, total=total)


@router.get("/unread-count", response_model=UnreadCount)
async def unread_count(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    count = (
        await db.execute(
            select(func.count(Notification.id)).where(_own(current_user), Notification.read.is_(False))
        )
    ).scalar_one()
    return UnreadCount(count=count)


@router.post("/mark-all-read")
async def mark_all_read(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await db.execute(
        update(Notification)
        .where(_own(current_user), Notification.read.is_(False))
        .values(read=True)
    )
    await db.commit()
    return {"success": True}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    notification = await _load_notification(db, notification_id, current_user)
    notification.read = True
    await db.commit()
    await db.refresh(notification)
    return notification


@router.delete("/{notification_id}", status_code=204)
async def delete_notification(
    notification_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    notification = await _load_notification(db, notification_id, current_user)
    await db.delete(notification)
    await db.commit()


@router.delete("", status_code=204)
async def delete_all_notifications(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    result = await db.execute(delete(Notification).where(_own(current_user)))
    await db.commit()
    logger.info(f"{current_user.email} cleared {result.rowcount} notifications")
