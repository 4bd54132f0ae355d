"""
User management endpoints (admin only).
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import require_admin
from careers.api.scoping import get_owned_or_404
from careers.api.user_logs import ActivityLog, get_activity_log
from careers.database import get_db
from careers.models.user import User, UserRole
from careers.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    result = await db.execute(
        select(User).where(User.company_id == admin.company_id).order_by(User.email)
    )
    return result.scalars().all()


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
    activity: ActivityLog = Depends(get_activity_log)
):
    """Invite a user into the admin's company. They log in with a magic link."""
    email = data.email.lower()
    existing = await db.execute(select(User).where(User.email == email))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=409, detail=f"A user with email {email} already exists")

    user = User(email=email, full_name=data.full_name, role=data.role, company_id=admin.company_id)
    db.add(user)
    await db.commit()
    await db.refresh(user)

    await activity.log("create", "user", user.id, {"email": user.email, "role": user.role.value})
    logger.info(f"Admin {admin.email} created user {user.email} with role {user.role.value}")
    return user


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
    activity: ActivityLog = Depends(get_activity_log)
):
    user = await get_owned_or_404(db, User, user_id, admin, "User")

    if data.role is not None and user.id == admin.id and data.role != UserRole.ADMIN:
        raise HTTPException(status_code=400, detail="You cannot remove your own admin role")

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(user, field, value)

    await db.commit()
    await db.refresh(user)
    await activity.log("update", "user", user.id, data.model_dump(mode="json", exclude_unset=True))
    return user


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
    activity: ActivityLog = Depends(get_activity_log)
):
    user = await get_owned_or_404(db, User, user_id, admin, "User")
    if user.id == admin.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")

    await db.delete(user)
    await db.commit()
    await activity.log("delete", "user", user_id, {"email": user.email})
    logger.info(f"Admin {admin.email} deleted user {user.email}")
