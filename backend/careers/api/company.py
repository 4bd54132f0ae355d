"""
Company profile and settings endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user, require_admin
from careers.database import get_db
from careers.models.company import Company
from careers.models.user import User
from careers.schemas.company import CompanyDetails, CompanyResponse, CompanySettingsUpdate
from careers.services import company as company_service

logger = logging.getLogger(__name__)
router = APIRouter()


async def _load_company(db: AsyncSession, user: User) -> Company:
    company = await company_service.get_company(db, user.company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.get("", response_model=CompanyResponse)
async def get_company_details(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get the profile of the current user's company."""
    return await _load_company(db, current_user)


@router.post("", response_model=CompanyResponse)
async def save_company_details(
    details: CompanyDetails,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Save the company profile (whole document)."""
    company = await _load_company(db, admin)
    return await company_service.save_company_details(db, company, details)


@router.put("", response_model=CompanyResponse)
async def update_company(
    details: CompanyDetails,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Replace the company profile. Last write wins."""
    company = await _load_company(db, admin)
    return await company_service.save_company_details(db, company, details)


@router.put("/settings", response_model=CompanyResponse)
async def update_company_settings(
    update: CompanySettingsUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Update approval type, calendar provider and allowed email domains.

    Allowed domains are lower-cased and de-duplicated.
    """
    company = await _load_company(db, admin)
    return await company_service.update_company_settings(db, company, update)
