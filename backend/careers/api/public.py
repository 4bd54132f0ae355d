"""
Public careers-site API.

Read endpoints are open. Submitting an application requires a company API
key pair in the X-API-Key / X-API-Secret headers.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.database import get_db
from careers.models.company import Company
from careers.models.company_api_key import CompanyApiKey
from careers.models.job import Job, JobStatus
from careers.models.job_application import JobApplication
from careers.models.job_board import JobBoard
from careers.schemas.application import PublicApplicationCreate, PublicApplicationResponse
from careers.schemas.company import PublicCompanyResponse
from careers.schemas.job import PublicJobResponse
from careers.schemas.job_board import PublicJobBoardResponse
from careers.services.api_keys import verify_api_key
from careers.services.notifications import notify_new_application

logger = logging.getLogger(__name__)
router = APIRouter()


async def require_api_key(
    x_api_key: str = Header(..., alias="X-API-Key"),
    x_api_secret: str = Header(..., alias="X-API-Secret"),
    db: AsyncSession = Depends(get_db)
) -> CompanyApiKey:
    api_key = await verify_api_key(db, x_api_key, x_api_secret)
    if not api_key:
        raise HTTPException(status_code=401, detail="Invalid API credentials")
    return api_key


async def _active_board(db: AsyncSession, *conditions) -> JobBoard:
    result = await db.execute(select(JobBoard).where(JobBoard.is_active.is_(True), *conditions))
    board = result.scalar_one_or_none()
    if not board:
        raise HTTPException(status_code=404, detail="Job board not found")
    return board


@router.get("/company/{company_id}", response_model=PublicCompanyResponse)
async def get_public_company(company_id: UUID, db: AsyncSession = Depends(get_db)):
    company = await db.get(Company, company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.get("/job-boards/slug/{slug}", response_model=PublicJobBoardResponse)
async def get_job_board_by_slug(slug: str, db: AsyncSession = Depends(get_db)):
    return await _active_board(db, JobBoard.slug == slug)


@router.get("/job-boards/domain/{domain}", response_model=PublicJobBoardResponse)
async def get_job_board_by_domain(domain: str, db: AsyncSession = Depends(get_db)):
    return await _active_board(db, JobBoard.custom_domain == domain.lower())


@router.get("/jobs/job-board/{job_board_id}", response_model=list[PublicJobResponse])
async def list_public_jobs(job_board_id: UUID, db: AsyncSession = Depends(get_db)):
    """Published jobs of an active board, newest first."""
    await _active_board(db, JobBoard.id == job_board_id)
    result = await db.execute(
        select(Job)
        .where(Job.job_board_id == job_board_id, Job.status == JobStatus.PUBLISHED.value)
        .order_by(Job.published_date.desc(), Job.created_at.desc())
    )
    return result.scalars().all()


@router.get("/jobs/{job_id}", response_model=PublicJobResponse)
async def get_public_job(job_id: UUID, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Job).where(Job.id == job_id, Job.status == JobStatus.PUBLISHED.value)
    )
    job = result.scalar_one_or_none()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.post("/job-applications", response_model=PublicApplicationResponse, status_code=201)
async def submit_application(
    data: PublicApplicationCreate,
    api_key: CompanyApiKey = Depends(require_api_key),
    db: AsyncSession = Depends(get_db)
):
    """Apply to a published job of the key's company."""
    result = await db.execute(
        select(Job).where(
            Job.id == data.job_id,
            Job.company_id == api_key.company_id,
            Job.status == JobStatus.PUBLISHED.value,
        )
    )
    job = result.scalar_one_or_none()
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")

    application = JobApplication(company_id=api_key.company_id, **data.model_dump())
    db.add(application)
    await db.flush()
    await notify_new_application(db, application, job)
    await db.commit()
    await db.refresh(application)

    logger.info(f"Public application {application.id} for job {application.job_id} via key {api_key.key}")
    return application
