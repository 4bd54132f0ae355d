"""
Company API key endpoints (admin only).
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import require_admin
from careers.api.scoping import get_owned_or_404
from careers.api.user_logs import ActivityLog, get_activity_log
from careers.database import get_db
from careers.models.company_api_key import CompanyApiKey
from careers.models.user import User
from careers.schemas.api_key import ApiKeyCreate, ApiKeyCreated, ApiKeyResponse
from careers.services import api_keys as api_key_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=ApiKeyCreated, status_code=201)
async def generate_api_key(
    data: ApiKeyCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
    activity: ActivityLog = Depends(get_activity_log)
):
    """Generate a key pair. The plain secret is returned only in this response."""
    api_key, secret = await api_key_service.create_api_key(
        db, admin.company_id, data.name, data.description, admin.id
    )
    await activity.log("create", "api_key", api_key.id, {"name": api_key.name})
    return ApiKeyCreated(
        id=api_key.id,
        key=api_key.key,
        secret_key=secret,
        name=api_key.name,
        description=api_key.description,
        is_active=api_key.is_active,
        created_at=api_key.created_at,
    )


@router.get("", response_model=list[ApiKeyResponse])
async def list_api_keys(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    result = await db.execute(
        select(CompanyApiKey)
        .where(CompanyApiKey.company_id == admin.company_id)
        .order_by(CompanyApiKey.created_at.desc())
    )
    return result.scalars().all()


@router.get("/{key_id}", response_model=ApiKeyResponse)
async def get_api_key(
    key_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    return await get_owned_or_404(db, CompanyApiKey, key_id, admin, "API key")


@router.patch("/{key_id}/toggle", response_model=ApiKeyResponse)
async def toggle_api_key(
    key_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
    activity: ActivityLog = Depends(get_activity_log)
):
    """Activate or deactivate a key."""
    api_key = await get_owned_or_404(db, CompanyApiKey, key_id, admin, "API key")
    api_key = await api_key_service.toggle_api_key(db, api_key)
    await activity.log("update", "api_key", api_key.id, {"is_active": api_key.is_active})
    return api_key


@router.delete("/{key_id}", status_code=204)
async def delete_api_key(
    key_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
    activity: ActivityLog = Depends(get_activity_log)
):
    api_key = await get_owned_or_404(db, CompanyApiKey, key_id, admin, "API key")
    await db.delete(api_key)
    await db.commit()
    await activity.log("delete", "api_key", key_id, {"name": api_key.name})
    logger.info(f"Deleted API key {api_key.key}")
