"""
Passwordless login for console users.

A company admin signs up, every user logs in through a one-time magic link
and then calls the API with `Authorization: Bearer <access token>`. With
EMAIL_MODE=dev the link is written to the log.

Expired links count as failed attempts; MAX_FAILED_ATTEMPTS of them lock
the account for ACCOUNT_LOCK_MINUTES. Login IPs are kept for auditing.
"""
import logging
import secrets
from datetime import timedelta
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.config import settings
from careers.database import get_db
from careers.database_types import utcnow
from careers.models.company import Company
from careers.models.user import User, UserRole
from careers.schemas.auth import (
    AuthResponse,
    MagicLinkRequest,
    MagicLinkResponse,
    SignupRequest,
    VerifyTokenRequest,
)
from careers.schemas.user import UserResponse
from careers.services.company import SignupError, create_company_with_admin

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_FAILED_ATTEMPTS = 5
ACCOUNT_LOCK_MINUTES = 30


def _locked_detail(user: User, prefix: str) -> str:
    return f"{prefix} Try again after {user.account_locked_until.isoformat()}"


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Resolve the bearer token to its user.

    Raises:
        HTTPException 401: Missing header, unknown or expired token
        HTTPException 403: Locked account
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = (await db.execute(select(User).where(User.access_token == token.strip()))).scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid token.")

    if not user.access_token_expires_at or user.access_token_expires_at < utcnow():
        raise HTTPException(status_code=401, detail="Session expired. Please log in again.")

    if user.is_account_locked():
        raise HTTPException(
            status_code=403,
            detail=_locked_detail(user, "Account temporarily locked due to multiple failed login attempts."),
        )

    return user


def require_roles(*roles: UserRole):
    """Dependency factory: 403 unless the current user has one of `roles`."""
    allowed = [r.value for r in roles]

    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role in roles:
            return current_user
        logger.warning(f"{current_user.email} ({current_user.role.value}) denied, needs one of {allowed}")
        raise HTTPException(status_code=403, detail="You do not have permission to access this resource.")

    return dependency


require_admin = require_roles(UserRole.ADMIN)
require_approver = require_roles(UserRole.ADMIN, UserRole.DIRECTOR)


def get_client_ip(request: Request) -> str:
    """First X-Forwarded-For hop when behind a proxy, else the peer address."""
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client else "unknown"


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        access_token=user.access_token,
        user_id=str(user.id),
        company_id=str(user.company_id),
        email=user.email,
        full_name=user.full_name,
        role=user.role.value,
    )


async def _issue_magic_link(db: AsyncSession, user: User) -> None:
    user.magic_link_token = uuid4().hex
    user.magic_link_expires_at = utcnow() + timedelta(minutes=settings.magic_link_ttl_minutes)
    await db.commit()

    link = f"{settings.get_frontend_url()}/auth/verify?token={user.magic_link_token}"
    if settings.email_mode == "dev":
        logger.info(f"Magic link for {user.email}: {link} (expires {user.magic_link_expires_at})")
    else:
        # TODO: send through the transactional email provider once one is configured
        logger.info(f"Magic link generated for {user.email}")


async def _company_for_domain(db: AsyncSession, email: str) -> Optional[Company]:
    domain = email.rsplit("@", 1)[-1].lower()
    for company in (await db.execute(select(Company))).scalars():
        if domain in (company.allowed_domains or []):
            return company
    return None


@router.post("/signup", response_model=MagicLinkResponse, status_code=201)
async def signup(
    request: SignupRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a company with its first admin and mail the admin a login link.

    Returns:
        201: Company created
        409: Email already registered
    """
    try:
        user = await create_company_with_admin(db, request.company_name, request.email, request.full_name)
    except SignupError as e:
        raise HTTPException(status_code=409, detail=str(e))

    await _issue_magic_link(db, user)
    return MagicLinkResponse(
        message="Company created! Check your email (or console in dev mode) to log in.",
        email=user.email
    )


@router.post("/request-magic-link", response_model=MagicLinkResponse)
async def request_magic_link(
    request: MagicLinkRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Send a login link to an existing user.

    An unknown email whose domain a company allows joins that company with
    the `user` role.

    Returns:
        200: Link issued
        404: No account and no company accepting the domain
        500: Database error
    """
    email = request.email.lower()
    try:
        user = (await db.execute(select(User).where(User.email == email))).scalar_one_or_none()
        if user is None:
            company = await _company_for_domain(db, email)
            if company is None:
                raise HTTPException(
                    status_code=404,
                    detail="No account found for this email. Ask your admin for access or sign up."
                )
            user = User(email=email, company_id=company.id, role=UserRole.USER)
            db.add(user)
            logger.info(f"{email} joins company {company.id} through its allowed domain")

        await _issue_magic_link(db, user)
    except HTTPException:
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"Could not issue magic link for {email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate magic link. Please try again.")

    return MagicLinkResponse(message="Magic link sent! Check your email (or console in dev mode).", email=user.email)


@router.post("/verify-token", response_model=AuthResponse)
async def verify_token(
    verify_request: VerifyTokenRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Exchange a magic link token for a bearer access token.

    Returns:
        200: Logged in
        401: Unknown or expired link
        403: Account locked
        500: Database error
    """
    ip = get_client_ip(request)
    try:
        user = (
            await db.execute(select(User).where(User.magic_link_token == verify_request.token))
        ).scalar_one_or_none()
        if user is None:
            logger.warning(f"Unknown magic link token presented from {ip}")
            raise HTTPException(status_code=401, detail="Invalid token. Please request a new magic link.")

        if user.is_account_locked():
            logger.warning(f"Locked account {user.email} tried to log in from {ip}")
            raise HTTPException(status_code=403, detail=_locked_detail(user, "Account temporarily locked."))

        if user.magic_link_expired():
            if user.record_failed_login(MAX_FAILED_ATTEMPTS, ACCOUNT_LOCK_MINUTES):
                logger.warning(f"Locking {user.email} after {MAX_FAILED_ATTEMPTS} failed attempts")
            user.clear_magic_link()
            await db.commit()
            raise HTTPException(status_code=401, detail="Token expired. Please request a new magic link.")

        user.start_session(secrets.token_urlsafe(32), settings.access_token_ttl_hours, ip)
        await db.commit()
    except HTTPException:
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"Magic link verification failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Authentication failed. Please try again.")

    logger.info(f"{user.email} logged in from {ip}")
    return _auth_response(user)


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/logout")
async def logout(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Revoke the caller's access token."""
    current_user.end_session()
    await db.commit()
    logger.info(f"{current_user.email} logged out")
    return {"message": "Successfully logged out"}
