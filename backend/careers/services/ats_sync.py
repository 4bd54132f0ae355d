"""
ATS sync service.
Fetches postings from Greenhouse / Ashby job boards and mirrors them as jobs
on the company's external job board.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import aiohttp
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.config import settings
from careers.database_types import utcnow
from careers.models.job import Job, JobStatus
from careers.models.job_board import JobBoard
from careers.schemas.job_board import ExternalPosting, SyncResult
from careers.services.html_content import sanitize_imported_html, sanitize_html
from careers.services.job_workflow import apply_transition, can_transition

logger = logging.getLogger(__name__)

GREENHOUSE_BASE = "https://boards-api.greenhouse.io/v1/boards"
ASHBY_BASE = "https://api.ashbyhq.com/posting-api/job-board"
USER_AGENT = "CareersATS/1.0 (job board sync)"


class AtsFetchError(Exception):
    """Raised when an ATS feed cannot be fetched or parsed"""
    pass


async def _fetch_json(
    session: aiohttp.ClientSession,
    url: str,
    label: str,
    timeout_s: int,
) -> Dict[str, Any]:
    """GET a JSON document, retrying once after 0.5s."""
    headers = {"User-Agent": USER_AGENT}
    last_error: Optional[Exception] = None

    for attempt in range(2):
        try:
            timeout = aiohttp.ClientTimeout(total=timeout_s)
            async with session.get(url, headers=headers, timeout=timeout) as resp:
                if resp.status != 200:
                    body_text = await resp.text(errors="ignore")
                    logger.warning(f"[{label}] status={resp.status} body_head={body_text[:200]!r}")
                    raise AtsFetchError(f"{label} returned HTTP {resp.status}")
                data = await resp.json(content_type=None)
                if not isinstance(data, dict):
                    raise AtsFetchError(f"{label} returned an unexpected payload")
                return data
        except AtsFetchError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            last_error = e
            logger.error(f"[{label}] Error (attempt {attempt + 1}/2): {type(e).__name__}: {str(e)[:200]}")
            if attempt == 0:
                await asyncio.sleep(0.5)

    raise AtsFetchError(f"{label} could not be fetched: {last_error}")


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


async def fetch_greenhouse_jobs(
    board_token: str,
    session: aiohttp.ClientSession,
    timeout_s: int = 15,
) -> List[Dict[str, Any]]:
    """Fetch jobs (with content) from a Greenhouse board via the public API."""
    url = f"{GREENHOUSE_BASE}/{board_token}/jobs?content=true"
    data = await _fetch_json(session, url, f"greenhouse:{board_token}", timeout_s)
    jobs = data.get("jobs", [])
    logger.info(f"[greenhouse:{board_token}] jobs_count={len(jobs)}")
    return jobs if isinstance(jobs, list) else []


async def fetch_ashby_jobs(
    board_token: str,
    session: aiohttp.ClientSession,
    timeout_s: int = 15,
) -> List[Dict[str, Any]]:
    """Fetch listed postings from an Ashby job board."""
    url = f"{ASHBY_BASE}/{board_token}"
    data = await _fetch_json(session, url, f"ashby:{board_token}", timeout_s)
    jobs = data.get("jobs", [])
    logger.info(f"[ashby:{board_token}] jobs_count={len(jobs)}")
    return jobs if isinstance(jobs, list) else []


def normalize_greenhouse_job(raw_job: dict) -> Optional[ExternalPosting]:
    job_id = raw_job.get("id")
    title = raw_job.get("title")
    if job_id is None or not title:
        return None  # skip malformed jobs
    return ExternalPosting(
        external_id=str(job_id),
        title=title.strip(),
        location=(raw_job.get("location") or {}).get("name"),
        content=sanitize_imported_html(raw_job.get("content")),
        apply_url=raw_job.get("absolute_url"),
        published_at=_parse_timestamp(raw_job.get("first_published") or raw_job.get("updated_at")),
    )


def normalize_ashby_job(raw_job: dict) -> Optional[ExternalPosting]:
    job_id = raw_job.get("id")
    title = raw_job.get("title")
    if not job_id or not title:
        return None
    if raw_job.get("isListed") is False:
        return None
    content = raw_job.get("descriptionHtml")
    return ExternalPosting(
        external_id=str(job_id),
        title=title.strip(),
        location=raw_job.get("location"),
        content=sanitize_html(content) if content else None,
        apply_url=raw_job.get("jobUrl") or raw_job.get("applyUrl"),
        published_at=_parse_timestamp(raw_job.get("publishedAt")),
    )


async def fetch_board_postings(source: str, board_token: str) -> List[ExternalPosting]:
    """Fetch and normalize every posting of an ATS board."""
    fetchers = {
        "greenhouse": (fetch_greenhouse_jobs, normalize_greenhouse_job),
        "ashby": (fetch_ashby_jobs, normalize_ashby_job),
    }
    if source not in fetchers:
        raise ValueError(f"Job boards with source '{source}' cannot be synced")
    fetch, normalize = fetchers[source]

    async with aiohttp.ClientSession() as session:
        raw_jobs = await fetch(board_token, session, settings.ats_timeout_seconds)

    postings = []
    for raw_job in raw_jobs:
        posting = normalize(raw_job)
        if posting:
            postings.append(posting)
        else:
            logger.warning(f"Skipped malformed {source} posting: {str(raw_job)[:200]}")
    return postings


async def sync_job_board(db: AsyncSession, board: JobBoard) -> SyncResult:
    """
    Mirror an external board's ATS postings as jobs.

    New postings are created as published jobs, known postings are updated in
    place, and jobs whose posting disappeared from the feed are archived.

    Raises:
        ValueError: If the board is not an external board with a board token
        AtsFetchError: If the feed cannot be fetched
    """
    if not board.is_external or board.source not in ("greenhouse", "ashby"):
        raise ValueError("Only external Greenhouse or Ashby boards can be refreshed")

    board_token = (board.settings or {}).get("board_token") or board.external_id
    if not board_token:
        raise ValueError("Job board has no board_token configured")

    postings = await fetch_board_postings(board.source, board_token)

    result = await db.execute(
        select(Job).where(Job.job_board_id == board.id, Job.external_id.is_not(None))
    )
    existing = {job.external_id: job for job in result.scalars().all()}

    created = updated = archived = 0
    seen = set()
    now = utcnow()

    for posting in postings:
        if posting.external_id in seen:
            continue
        seen.add(posting.external_id)
        job = existing.get(posting.external_id)

        if job is None:
            db.add(Job(
                company_id=board.company_id,
                job_board_id=board.id,
                external_id=posting.external_id,
                title=posting.title,
                location=posting.location,
                content=posting.content,
                status=JobStatus.PUBLISHED.value,
                published_date=posting.published_at or now,
                last_status_change_at=now,
                departments=[],
                offices=[],
            ))
            created += 1
            continue

        changed = False
        for field in ("title", "location", "content"):
            value = getattr(posting, field)
            if getattr(job, field) != value:
                setattr(job, field, value)
                changed = True
        if changed:
            updated += 1

    for external_id, job in existing.items():
        if external_id in seen:
            continue
        if can_transition(JobStatus(job.status), JobStatus.ARCHIVED):
            apply_transition(job, JobStatus.ARCHIVED)
            archived += 1

    board.last_synced_at = now
    await db.commit()

    logger.info(
        f"Synced {board.source} board {board.id}: fetched={len(postings)} "
        f"created={created} updated={updated} archived={archived}"
    )

    return SyncResult(
        job_board_id=board.id,
        source=board.source,
        fetched=len(postings),
        created=created,
        updated=updated,
        archived=archived,
    )
