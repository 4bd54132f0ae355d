"""
Company API keys for the public careers-site API.

Keys are `ck_` + 16 random bytes (hex), secrets `sk_` + 32 random bytes (hex).
Only an HMAC of the secret is stored.
"""
import hashlib
import hmac
import logging
import secrets
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.config import settings
from careers.database_types import utcnow
from careers.models.company_api_key import CompanyApiKey

logger = logging.getLogger(__name__)

KEY_PREFIX = "ck_"
SECRET_PREFIX = "sk_"


def generate_key_pair() -> Tuple[str, str]:
    return KEY_PREFIX + secrets.token_hex(16), SECRET_PREFIX + secrets.token_hex(32)


def hash_secret(secret: str) -> str:
    return hmac.new(settings.secret_key.encode(), secret.encode(), hashlib.sha256).hexdigest()


def mask_secret_key(secret: str) -> str:
    """First 8 and last 4 characters, e.g. sk_1a2b3••••••••9f0e"""
    if len(secret) <= 12:
        return "•" * len(secret)
    return f"{secret[:8]}••••••••{secret[-4:]}"


async def create_api_key(
    db: AsyncSession,
    company_id: UUID,
    name: str,
    description: Optional[str],
    created_by: Optional[UUID],
) -> Tuple[CompanyApiKey, str]:
    """Create a key and return it with the plain secret (never retrievable again)."""
    key, secret = generate_key_pair()
    api_key = CompanyApiKey(
        company_id=company_id,
        key=key,
        secret_hash=hash_secret(secret),
        secret_hint=mask_secret_key(secret),
        name=name,
        description=description,
        created_by=created_by,
        is_active=True,
    )
    db.add(api_key)
    await db.commit()
    await db.refresh(api_key)

    logger.info(f"Created API key {api_key.key} ({api_key.name}) for company {company_id}")
    return api_key, secret


async def verify_api_key(db: AsyncSession, key: str, secret: str) -> Optional[CompanyApiKey]:
    """
    Return the active key matching key/secret and stamp last_used_at, or None.
    """
    result = await db.execute(select(CompanyApiKey).where(CompanyApiKey.key == key))
    api_key = result.scalar_one_or_none()

    if not api_key or not api_key.is_active:
        return None
    if not hmac.compare_digest(api_key.secret_hash, hash_secret(secret)):
        logger.warning(f"Invalid secret presented for API key {key}")
        return None

    api_key.last_used_at = utcnow()
    await db.commit()
    return api_key


async def toggle_api_key(db: AsyncSession, api_key: CompanyApiKey) -> CompanyApiKey:
    api_key.is_active = not api_key.is_active
    await db.commit()
    await db.refresh(api_key)
    logger.info(f"API key {api_key.key} is now {'active' if api_key.is_active else 'inactive'}")
    return api_key
