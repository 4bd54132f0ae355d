"""Authentication-related Pydantic schemas."""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    """Register a new company together with its first admin."""
    company_name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    full_name: Optional[str] = None


class MagicLinkRequest(BaseModel):
    """Request to send magic link email."""
    email: EmailStr


class MagicLinkResponse(BaseModel):
    """Response after requesting magic link."""
    message: str
    email: str


class VerifyTokenRequest(BaseModel):
    """Request to verify magic link token."""
    token: str


class AuthResponse(BaseModel):
    """Response after successful authentication."""
    access_token: str
    token_type: str = "bearer"
    user_id: str
    company_id: str
    email: str
    full_name: str | None
    role: str
