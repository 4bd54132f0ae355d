"""Office schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OfficeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1, max_length=500)
    is_main: bool = False


class OfficeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    address: Optional[str] = Field(default=None, min_length=1, max_length=500)
    is_main: Optional[bool] = None


class OfficeSummary(BaseModel):
    id: UUID
    name: str
    address: str

    model_config = ConfigDict(from_attributes=True)


class OfficeResponse(OfficeSummary):
    is_main: bool
    company_id: UUID
    created_at: datetime
    updated_at: datetime
