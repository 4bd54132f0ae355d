"""
Department tree operations: parent validation, hierarchy building, deletion rules.
"""
import logging
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.department import Department
from careers.models.job_function import JobRole
from careers.schemas.department import DepartmentNode

logger = logging.getLogger(__name__)


class DepartmentError(ValueError):
    """Raised for invalid department tree operations"""
    pass


async def list_departments(db: AsyncSession, company_id: UUID) -> List[Department]:
    result = await db.execute(
        select(Department)
        .where(Department.company_id == company_id)
        .order_by(Department.title)
    )
    return list(result.scalars().all())


async def validate_parent(
    db: AsyncSession,
    company_id: UUID,
    department_id: Optional[UUID],
    parent_id: Optional[UUID],
) -> None:
    """
    Ensure the parent exists in the same company and would not create a cycle.

    Walks up from the proposed parent; reaching department_id means the
    department would become its own ancestor.
    """
    if parent_id is None:
        return
    if department_id is not None and parent_id == department_id:
        raise DepartmentError("A department cannot be its own parent")

    departments = {d.id: d for d in await list_departments(db, company_id)}
    if parent_id not in departments:
        raise DepartmentError(f"Parent department {parent_id} not found")

    seen = set()
    current = departments.get(parent_id)
    while current is not None and current.id not in seen:
        if department_id is not None and current.id == department_id:
            raise DepartmentError("Moving this department under its own sub-department would create a cycle")
        seen.add(current.id)
        current = departments.get(current.parent_department_id)


async def resolve_job_roles(db: AsyncSession, company_id: UUID, role_ids: List[UUID]) -> List[JobRole]:
    if not role_ids:
        return []
    result = await db.execute(
        select(JobRole).where(JobRole.company_id == company_id, JobRole.id.in_(role_ids))
    )
    roles = list(result.scalars().all())
    missing = set(role_ids) - {role.id for role in roles}
    if missing:
        raise DepartmentError(f"Job roles not found: {', '.join(sorted(str(m) for m in missing))}")
    return roles


async def has_children(db: AsyncSession, department: Department) -> bool:
    result = await db.execute(
        select(Department.id).where(Department.parent_department_id == department.id).limit(1)
    )
    return result.first() is not None


def build_hierarchy(departments: List[Department]) -> List[DepartmentNode]:
    """Nest departments under their parents. Orphans (parent outside the list) become roots."""
    nodes: Dict[UUID, DepartmentNode] = {
        d.id: DepartmentNode(
            id=d.id,
            title=d.title,
            description=d.description,
            parent_department_id=d.parent_department_id,
        )
        for d in departments
    }
    roots: List[DepartmentNode] = []
    for department in departments:
        node = nodes[department.id]
        parent = nodes.get(department.parent_department_id) if department.parent_department_id else None
        if parent is not None:
            parent.children.append(node)
        else:
            roots.append(node)
    return roots
