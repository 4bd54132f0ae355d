"""Tenant-scoped lookups shared by the routers."""
from typing import Type, TypeVar
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.user import User

ModelT = TypeVar("ModelT")


async def get_owned_or_404(
    db: AsyncSession,
    model: Type[ModelT],
    object_id: UUID,
    user: User,
    label: str,
) -> ModelT:
    """Fetch a row of the user's company; rows of other companies look missing."""
    result = await db.execute(
        select(model).where(model.id == object_id, model.company_id == user.company_id)
    )
    obj = result.scalar_one_or_none()
    if obj is None:
        raise HTTPException(status_code=404, detail=f"{label} {object_id} not found")
    return obj
