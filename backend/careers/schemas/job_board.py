"""Job board schemas."""
from datetime import datetime
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class JobBoardCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    slug: Optional[str] = Field(default=None, max_length=255)
    custom_domain: Optional[str] = None
    is_active: bool = True
    settings: dict[str, Any] = Field(default_factory=dict)


class JobBoardUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    custom_domain: Optional[str] = None
    is_active: Optional[bool] = None
    settings: Optional[dict[str, Any]] = None


class ExternalJobBoardCreate(BaseModel):
    """Board token of the ATS account to mirror."""
    board_token: Optional[str] = None


class JobBoardResponse(BaseModel):
    id: UUID
    company_id: UUID
    title: str
    slug: str
    description: Optional[str] = None
    custom_domain: Optional[str] = None
    is_external: bool
    source: Literal["greenhouse", "ashby", "custom"]
    external_id: Optional[str] = None
    settings: dict[str, Any] = Field(default_factory=dict)
    is_active: bool
    last_synced_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PublicJobBoardResponse(BaseModel):
    id: UUID
    company_id: UUID
    title: str
    slug: str
    description: Optional[str] = None
    custom_domain: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SyncResult(BaseModel):
    """Outcome of refreshing an external board from its ATS."""
    job_board_id: UUID
    source: str
    fetched: int
    created: int
    updated: int
    archived: int


class ExternalPosting(BaseModel):
    """A posting normalized from a Greenhouse or Ashby feed."""
    external_id: str
    title: str
    location: Optional[str] = None
    content: Optional[str] = None
    apply_url: Optional[str] = None
    published_at: Optional[datetime] = None
