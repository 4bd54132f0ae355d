"""
Admin home dashboard endpoint.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user
from careers.database import get_db
from careers.models.user import User
from careers.schemas.dashboard import DashboardStats
from careers.services.dashboard import get_dashboard_stats

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await get_dashboard_stats(db, current_user)
