"""
Department endpoints, including the department tree.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user, require_admin
from careers.api.scoping import get_owned_or_404
from careers.database import get_db
from careers.models.department import Department
from careers.models.user import User
from careers.schemas.department import (
    DepartmentCreate,
    DepartmentNode,
    DepartmentResponse,
    DepartmentUpdate,
)
from careers.services import departments as department_service
from careers.services.departments import DepartmentError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await department_service.list_departments(db, current_user.company_id)


@router.get("/hierarchy", response_model=list[DepartmentNode])
async def get_department_hierarchy(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Departments nested under their parents; top-level departments are the roots."""
    departments = await department_service.list_departments(db, current_user.company_id)
    return department_service.build_hierarchy(departments)


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await get_owned_or_404(db, Department, department_id, current_user, "Department")


@router.post("", response_model=DepartmentResponse, status_code=201)
async def create_department(
    data: DepartmentCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        await department_service.validate_parent(db, admin.company_id, None, data.parent_department_id)
        job_roles = await department_service.resolve_job_roles(db, admin.company_id, data.job_role_ids)
    except DepartmentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    department = Department(
        company_id=admin.company_id,
        title=data.title,
        description=data.description,
        parent_department_id=data.parent_department_id,
        approval_role=data.approval_role,
        job_roles=job_roles,
    )
    db.add(department)
    await db.commit()
    await db.refresh(department)

    logger.info(f"Created department {department.title} for company {admin.company_id}")
    return department


@router.patch("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: UUID,
    data: DepartmentUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Partial update. Re-parenting is rejected if it would create a cycle."""
    department = await get_owned_or_404(db, Department, department_id, admin, "Department")
    fields = data.model_dump(exclude_unset=True)

    try:
        if "parent_department_id" in fields:
            await department_service.validate_parent(
                db, admin.company_id, department.id, fields["parent_department_id"]
            )
        if "job_role_ids" in fields:
            department.job_roles = await department_service.resolve_job_roles(
                db, admin.company_id, fields.pop("job_role_ids") or []
            )
    except DepartmentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if "title" in fields and fields["title"] is None:
        fields.pop("title")

    for field, value in fields.items():
        setattr(department, field, value)

    await db.commit()
    await db.refresh(department)
    return department


@router.delete("/{department_id}", status_code=204)
async def delete_department(
    department_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Delete a leaf department. Departments with sub-departments cannot be deleted."""
    department = await get_owned_or_404(db, Department, department_id, admin, "Department")

    if await department_service.has_children(db, department):
        raise HTTPException(
            status_code=400,
            detail="Cannot delete a department that has sub-departments. Move or delete them first."
        )

    await db.delete(department)
    await db.commit()
    logger.info(f"Deleted department {department_id}")
