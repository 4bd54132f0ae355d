"""
Company (tenant) service.
Handles signup of new tenants and updates to the company profile and settings.
"""
import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified

from careers.models.company import Company, DEFAULT_COMPANY_SETTINGS
from careers.models.job_function import JobFunction, DEFAULT_JOB_FUNCTIONS
from careers.models.user import User, UserRole
from careers.schemas.company import CompanyDetails, CompanySettingsUpdate

logger = logging.getLogger(__name__)


class SignupError(ValueError):
    """Raised when a tenant cannot be created (e.g. email already registered)."""
    pass


async def create_company_with_admin(
    db: AsyncSession,
    company_name: str,
    email: str,
    full_name: Optional[str] = None,
) -> User:
    """
    Create a company, its first admin user and the default job functions.

    The admin's email domain is added to the company's allowed domains.
    """
    email = email.lower()
    existing = await db.execute(select(User).where(User.email == email))
    if existing.scalar_one_or_none():
        raise SignupError(f"A user with email {email} already exists")

    company = Company(
        name=company_name,
        settings=dict(DEFAULT_COMPANY_SETTINGS),
        allowed_domains=[email.split("@", 1)[1]],
        values=[],
        social_links={},
    )
    db.add(company)
    await db.flush()

    for title in DEFAULT_JOB_FUNCTIONS:
        db.add(JobFunction(company_id=company.id, title=title))

    admin = User(
        email=email,
        full_name=full_name,
        company_id=company.id,
        role=UserRole.ADMIN,
    )
    db.add(admin)
    await db.commit()
    await db.refresh(admin)

    logger.info(f"Created company {company.name} ({company.id}) with admin {admin.email}")
    return admin


async def get_company(db: AsyncSession, company_id: UUID) -> Optional[Company]:
    result = await db.execute(select(Company).where(Company.id == company_id))
    return result.scalar_one_or_none()


async def save_company_details(db: AsyncSession, company: Company, details: CompanyDetails) -> Company:
    """Replace the editable profile fields with the submitted document."""
    data = details.model_dump()
    for field, value in data.items():
        setattr(company, field, value)

    await db.commit()
    await db.refresh(company)
    logger.info(f"Updated company details for {company.id}")
    return company


async def update_company_settings(
    db: AsyncSession,
    company: Company,
    update: CompanySettingsUpdate,
) -> Company:
    """Merge approval/calendar settings and replace the allowed domains if given."""
    settings = dict(DEFAULT_COMPANY_SETTINGS)
    settings.update(company.settings or {})

    if update.approval_type is not None:
        settings["approval_type"] = update.approval_type
    if update.email_calendar_provider is not None:
        settings["email_calendar_provider"] = update.email_calendar_provider

    company.settings = settings
    flag_modified(company, "settings")

    if update.allowed_domains is not None:
        company.allowed_domains = update.allowed_domains
        flag_modified(company, "allowed_domains")

    await db.commit()
    await db.refresh(company)
    logger.info(f"Updated settings for company {company.id}: {settings}")
    return company
