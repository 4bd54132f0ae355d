"""
Job board endpoints, including external (Greenhouse / Ashby) boards and their sync.
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user, require_admin, require_roles
from careers.api.scoping import get_owned_or_404
from careers.database import get_db
from careers.models.job import Job
from careers.models.job_board import JobBoard
from careers.models.user import User, UserRole
from careers.schemas.job_board import (
    ExternalJobBoardCreate,
    JobBoardCreate,
    JobBoardResponse,
    JobBoardUpdate,
    SyncResult,
)
from careers.services import ats_sync
from careers.services.job_boards import get_or_create_external_board, unique_slug

logger = logging.getLogger(__name__)
router = APIRouter()

require_board_manager = require_roles(UserRole.ADMIN, UserRole.DIRECTOR, UserRole.RECRUITER)


async def _ensure_domain_free(db: AsyncSession, domain: Optional[str], exclude_id: Optional[UUID] = None) -> None:
    if not domain:
        return
    query = select(JobBoard.id).where(JobBoard.custom_domain == domain)
    if exclude_id is not None:
        query = query.where(JobBoard.id != exclude_id)
    result = await db.execute(query)
    if result.first() is not None:
        raise HTTPException(status_code=409, detail=f"Domain {domain} is already used by another job board")


@router.get("", response_model=list[JobBoardResponse])
async def list_job_boards(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    result = await db.execute(
        select(JobBoard).where(JobBoard.company_id == current_user.company_id).order_by(JobBoard.title)
    )
    return result.scalars().all()


@router.get("/{board_id}", response_model=JobBoardResponse)
async def get_job_board(
    board_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await get_owned_or_404(db, JobBoard, board_id, current_user, "Job board")


@router.post("", response_model=JobBoardResponse, status_code=201)
async def create_job_board(
    data: JobBoardCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_board_manager)
):
    """Create a custom job board. The slug defaults to the slugified title and is made unique."""
    domain = data.custom_domain.strip().lower() if data.custom_domain else None
    await _ensure_domain_free(db, domain)

    board = JobBoard(
        company_id=current_user.company_id,
        title=data.title,
        slug=await unique_slug(db, data.slug or data.title),
        description=data.description,
        custom_domain=domain,
        is_external=False,
        source="custom",
        settings=data.settings,
        is_active=data.is_active,
    )
    db.add(board)
    await db.commit()
    await db.refresh(board)

    logger.info(f"Created job board {board.slug} for company {current_user.company_id}")
    return board


@router.post("/external/{source}", response_model=JobBoardResponse)
async def create_external_job_board(
    source: str,
    data: Optional[ExternalJobBoardCreate] = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_board_manager)
):
    """Get or create the company's board for an ATS (greenhouse or ashby)."""
    try:
        return await get_or_create_external_board(
            db, current_user.company_id, source.lower(), data.board_token if data else None
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{board_id}", response_model=JobBoardResponse)
async def update_job_board(
    board_id: UUID,
    data: JobBoardUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_board_manager)
):
    board = await get_owned_or_404(db, JobBoard, board_id, current_user, "Job board")
    fields = data.model_dump(exclude_unset=True)

    if "custom_domain" in fields:
        domain = fields["custom_domain"].strip().lower() if fields["custom_domain"] else None
        await _ensure_domain_free(db, domain, board.id)
        fields["custom_domain"] = domain
    if "title" in fields and fields["title"] is None:
        fields.pop("title")
    if "settings" in fields and fields["settings"] is None:
        fields.pop("settings")

    for field, value in fields.items():
        setattr(board, field, value)

    await db.commit()
    await db.refresh(board)
    return board


@router.delete("/{board_id}", status_code=204)
async def delete_job_board(
    board_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Delete a board. Its jobs stay, detached from any board."""
    board = await get_owned_or_404(db, JobBoard, board_id, admin, "Job board")

    await db.execute(update(Job).where(Job.job_board_id == board.id).values(job_board_id=None))
    await db.delete(board)
    await db.commit()
    logger.info(f"Deleted job board {board_id}")


@router.post("/{board_id}/refresh", response_model=SyncResult)
async def refresh_job_board(
    board_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_board_manager)
):
    """
    Re-fetch an external board's postings from its ATS.

    Returns:
        200: Counts of created, updated and archived jobs
        400: Board is not an external board or has no board token
        502: ATS feed unavailable
    """
    board = await get_owned_or_404(db, JobBoard, board_id, current_user, "Job board")
    try:
        return await ats_sync.sync_job_board(db, board)
    except ats_sync.AtsFetchError as e:
        await db.rollback()
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
