"""Company profile and settings schemas."""
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompanyValue(BaseModel):
    text: str
    icon: Optional[str] = None


class SocialLinks(BaseModel):
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None


class CompanySettings(BaseModel):
    approval_type: Literal["headcount", "job-opening"] = "headcount"
    email_calendar_provider: Literal["google", "microsoft", "other"] = "other"


class CompanyDetails(BaseModel):
    """Editable company profile. Sent whole on save."""
    name: str = Field(min_length=1, max_length=255)
    logo: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    founded_year: Optional[int] = Field(default=None, ge=1800, le=2100)
    size: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    slogan: Optional[str] = None
    mission: Optional[str] = None
    vision: Optional[str] = None
    values: list[CompanyValue] = Field(default_factory=list)
    social_links: SocialLinks = Field(default_factory=SocialLinks)


class CompanySettingsUpdate(BaseModel):
    """Partial settings update; omitted fields keep their value."""
    approval_type: Optional[Literal["headcount", "job-opening"]] = None
    email_calendar_provider: Optional[Literal["google", "microsoft", "other"]] = None
    allowed_domains: Optional[list[str]] = None

    @field_validator("allowed_domains")
    @classmethod
    def normalize_domains(cls, value):
        if value is None:
            return value
        cleaned = []
        for domain in value:
            domain = domain.strip().lower()
            if domain and domain not in cleaned:
                cleaned.append(domain)
        return cleaned


class CompanyResponse(CompanyDetails):
    id: UUID
    settings: CompanySettings
    allowed_domains: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("values", "allowed_domains", mode="before")
    @classmethod
    def none_to_list(cls, value):
        return value or []

    @field_validator("social_links", "settings", mode="before")
    @classmethod
    def none_to_dict(cls, value):
        return value or {}


class PublicCompanyResponse(CompanyDetails):
    """Company profile as shown on the careers site."""
    id: UUID

    model_config = ConfigDict(from_attributes=True)

    @field_validator("values", mode="before")
    @classmethod
    def none_to_list(cls, value):
        return value or []

    @field_validator("social_links", mode="before")
    @classmethod
    def none_to_links(cls, value):
        return value or {}
