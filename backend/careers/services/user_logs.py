"""
Audit trail of console changes.

Entries are added to the caller's session and land in the same commit as
the change they describe.
"""
import logging
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.user import User
from careers.models.user_log import UserLog

logger = logging.getLogger(__name__)

REDACTED = "[REDACTED]"
SENSITIVE_KEYS = {"password", "token", "secret", "secret_key", "api_key", "access_token", "magic_link_token"}


def redact(value: Any) -> Any:
    """Copy of a request body with credential fields masked, at any depth."""
    if isinstance(value, dict):
        return {
            key: REDACTED if str(key).lower() in SENSITIVE_KEYS else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact(item) for item in value]
    return value


def record_action(
    db: AsyncSession,
    user: User,
    action: str,
    resource_type: str,
    resource_id: Optional[Any] = None,
    details: Optional[dict] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> UserLog:
    entry = UserLog(
        company_id=user.company_id,
        user_id=user.id,
        user_name=user.full_name,
        user_email=user.email,
        action=action,
        resource_type=resource_type,
        resource_id=str(resource_id) if resource_id is not None else None,
        details=redact(details) if details else None,
        ip_address=ip_address,
        user_agent=(user_agent or "")[:500] or None,
    )
    db.add(entry)
    logger.debug(f"{user.email} {action} {resource_type} {entry.resource_id}")
    return entry


async def page_of_logs(db: AsyncSession, query, page: int, limit: int) -> tuple[list[UserLog], int]:
    """Newest first. `query` is a select of UserLog already scoped to a company."""
    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar_one()
    result = await db.execute(
        query.order_by(UserLog.created_at.desc()).offset((page - 1) * limit).limit(limit)
    )
    return list(result.scalars().all()), total
