"""
Job function and job role endpoints.
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user, require_admin
from careers.api.scoping import get_owned_or_404
from careers.database import get_db
from careers.models.job_function import JobFunction, JobRole
from careers.models.user import User
from careers.schemas.job_function import (
    JobFunctionCreate,
    JobFunctionResponse,
    JobFunctionUpdate,
    JobRoleCreate,
    JobRoleResponse,
    JobRoleUpdate,
)

logger = logging.getLogger(__name__)
functions_router = APIRouter()
roles_router = APIRouter()


# ============================================================
# JOB FUNCTIONS
# ============================================================

@functions_router.get("", response_model=list[JobFunctionResponse])
async def list_job_functions(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    result = await db.execute(
        select(JobFunction)
        .where(JobFunction.company_id == current_user.company_id)
        .order_by(JobFunction.title)
    )
    return result.scalars().all()


@functions_router.get("/{function_id}", response_model=JobFunctionResponse)
async def get_job_function(
    function_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await get_owned_or_404(db, JobFunction, function_id, current_user, "Job function")


@functions_router.post("", response_model=JobFunctionResponse, status_code=201)
async def create_job_function(
    data: JobFunctionCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    job_function = JobFunction(company_id=admin.company_id, title=data.title)
    db.add(job_function)
    await db.commit()
    await db.refresh(job_function)
    return job_function


@functions_router.patch("/{function_id}", response_model=JobFunctionResponse)
async def update_job_function(
    function_id: UUID,
    data: JobFunctionUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    job_function = await get_owned_or_404(db, JobFunction, function_id, admin, "Job function")
    if data.title is not None:
        job_function.title = data.title
    await db.commit()
    await db.refresh(job_function)
    return job_function


@functions_router.delete("/{function_id}", status_code=204)
async def delete_job_function(
    function_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Delete a job function. Functions still used by job roles cannot be deleted."""
    job_function = await get_owned_or_404(db, JobFunction, function_id, admin, "Job function")

    in_use = await db.execute(select(JobRole.id).where(JobRole.job_function_id == job_function.id).limit(1))
    if in_use.first() is not None:
        raise HTTPException(
            status_code=400,
            detail="Cannot delete a job function that still has job roles"
        )

    await db.delete(job_function)
    await db.commit()


# ============================================================
# JOB ROLES
# ============================================================

@roles_router.get("", response_model=list[JobRoleResponse])
async def list_job_roles(
    job_function_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    query = select(JobRole).where(JobRole.company_id == current_user.company_id)
    if job_function_id:
        query = query.where(JobRole.job_function_id == job_function_id)
    result = await db.execute(query.order_by(JobRole.title))
    return result.scalars().all()


@roles_router.get("/{role_id}", response_model=JobRoleResponse)
async def get_job_role(
    role_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await get_owned_or_404(db, JobRole, role_id, current_user, "Job role")


@roles_router.post("", response_model=JobRoleResponse, status_code=201)
async def create_job_role(
    data: JobRoleCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    await get_owned_or_404(db, JobFunction, data.job_function_id, admin, "Job function")

    job_role = JobRole(company_id=admin.company_id, title=data.title, job_function_id=data.job_function_id)
    db.add(job_role)
    await db.commit()
    await db.refresh(job_role)
    return job_role


@roles_router.patch("/{role_id}", response_model=JobRoleResponse)
async def update_job_role(
    role_id: UUID,
    data: JobRoleUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    job_role = await get_owned_or_404(db, JobRole, role_id, admin, "Job role")

    if data.job_function_id is not None:
        await get_owned_or_404(db, JobFunction, data.job_function_id, admin, "Job function")
        job_role.job_function_id = data.job_function_id
    if data.title is not None:
        job_role.title = data.title

    await db.commit()
    await db.refresh(job_role)
    return job_role


@roles_router.delete("/{role_id}", status_code=204)
async def delete_job_role(
    role_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    job_role = await get_owned_or_404(db, JobRole, role_id, admin, "Job role")
    await db.delete(job_role)
    await db.commit()
