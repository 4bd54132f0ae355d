"""Company API key schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ApiKeyCreate(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)


class ApiKeyResponse(BaseModel):
    """An API key as listed. The secret is only ever shown masked."""
    id: UUID
    key: str
    secret_key: str = Field(validation_alias="secret_hint")
    name: str
    description: Optional[str] = None
    is_active: bool
    last_used_at: Optional[datetime] = None
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApiKeyCreated(BaseModel):
    """Returned once, at creation, with the plain secret."""
    id: UUID
    key: str
    secret_key: str
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
