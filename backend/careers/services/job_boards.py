"""
Job board helpers: slug generation and external (ATS-backed) boards.
"""
import logging
import re
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.job_board import JobBoard

logger = logging.getLogger(__name__)

EXTERNAL_SOURCES = {
    "greenhouse": "Greenhouse",
    "ashby": "Ashby",
}


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "board"


async def unique_slug(db: AsyncSession, value: str, exclude_id: Optional[UUID] = None) -> str:
    """Slugify and append -2, -3, ... until no other board uses it."""
    base = slugify(value)
    candidate = base
    suffix = 2
    while True:
        query = select(JobBoard.id).where(JobBoard.slug == candidate)
        if exclude_id is not None:
            query = query.where(JobBoard.id != exclude_id)
        result = await db.execute(query)
        if result.first() is None:
            return candidate
        candidate = f"{base}-{suffix}"
        suffix += 1


async def get_or_create_external_board(
    db: AsyncSession,
    company_id: UUID,
    source: str,
    board_token: Optional[str] = None,
) -> JobBoard:
    """
    Return the company's board for an ATS source, creating it on first use.

    Raises:
        ValueError: If the source is not a supported ATS
    """
    if source not in EXTERNAL_SOURCES:
        raise ValueError(f"Unsupported job board source: {source}")

    result = await db.execute(
        select(JobBoard).where(
            JobBoard.company_id == company_id,
            JobBoard.source == source,
            JobBoard.is_external.is_(True),
        )
    )
    board = result.scalar_one_or_none()

    if board:
        if board_token and (board.settings or {}).get("board_token") != board_token:
            board.settings = {**(board.settings or {}), "board_token": board_token}
            await db.commit()
            await db.refresh(board)
        return board

    title = EXTERNAL_SOURCES[source]
    board = JobBoard(
        company_id=company_id,
        title=title,
        slug=await unique_slug(db, f"{title}-{str(company_id)[:8]}"),
        description=f"Integrated job board from {title}",
        is_external=True,
        source=source,
        settings={"board_token": board_token} if board_token else {},
        is_active=True,
    )
    db.add(board)
    await db.commit()
    await db.refresh(board)

    logger.info(f"Created external {title} job board {board.id} for company {company_id}")
    return board
