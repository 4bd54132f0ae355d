"""
Job template endpoints.

Templates hold a reusable description per job role. Content is sanitized
the same way job content is.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user, require_roles
from careers.api.scoping import get_owned_or_404
from careers.api.user_logs import ActivityLog, get_activity_log
from careers.database import get_db
from careers.models.department import Department
from careers.models.job_function import JobRole
from careers.models.job_template import JobTemplate
from careers.models.user import User, UserRole
from careers.schemas.job_template import JobTemplateCreate, JobTemplateResponse, JobTemplateUpdate
from careers.services.html_content import sanitize_html

logger = logging.getLogger(__name__)
router = APIRouter()

RESOURCE = "job_template"

require_template_editor = require_roles(UserRole.ADMIN, UserRole.DIRECTOR, UserRole.RECRUITER)


def _company_templates(user: User):
    return select(JobTemplate).where(JobTemplate.company_id == user.company_id)


@router.post("", response_model=JobTemplateResponse, status_code=201)
async def create_job_template(
    data: JobTemplateCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_template_editor),
    activity: ActivityLog = Depends(get_activity_log)
):
    await get_owned_or_404(db, JobRole, data.job_role_id, current_user, "Job role")
    if data.department_id:
        await get_owned_or_404(db, Department, data.department_id, current_user, "Department")

    template = JobTemplate(
        company_id=current_user.company_id,
        name=data.name,
        content=sanitize_html(data.content),
        job_role_id=data.job_role_id,
        department_id=data.department_id,
    )
    db.add(template)
    await db.commit()
    await db.refresh(template)

    await activity.log("create", RESOURCE, template.id, {"name": template.name})
    return template


@router.get("", response_model=list[JobTemplateResponse])
async def list_job_templates(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    result = await db.execute(_company_templates(current_user).order_by(JobTemplate.name))
    return result.scalars().all()


@router.get("/role/{job_role_id}", response_model=list[JobTemplateResponse])
async def list_templates_for_role(
    job_role_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    result = await db.execute(
        _company_templates(current_user)
        .where(JobTemplate.job_role_id == job_role_id)
        .order_by(JobTemplate.name)
    )
    return result.scalars().all()


@router.get("/{template_id}", response_model=JobTemplateResponse)
async def get_job_template(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await get_owned_or_404(db, JobTemplate, template_id, current_user, "Job template")


@router.patch("/{template_id}", response_model=JobTemplateResponse)
async def update_job_template(
    template_id: UUID,
    data: JobTemplateUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_template_editor),
    activity: ActivityLog = Depends(get_activity_log)
):
    """Partial update. Send department_id=null to detach the department."""
    template = await get_owned_or_404(db, JobTemplate, template_id, current_user, "Job template")
    fields = data.model_dump(exclude_unset=True)

    if fields.get("job_role_id"):
        await get_owned_or_404(db, JobRole, fields["job_role_id"], current_user, "Job role")
    if fields.get("department_id"):
        await get_owned_or_404(db, Department, fields["department_id"], current_user, "Department")
    if fields.get("content"):
        fields["content"] = sanitize_html(fields["content"])

    for field, value in fields.items():
        if value is None and field != "department_id":
            continue
        setattr(template, field, value)

    await db.commit()
    await db.refresh(template)

    await activity.log("update", RESOURCE, template.id, {"fields": sorted(fields)})
    return template


@router.delete("/{template_id}", status_code=204)
async def delete_job_template(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_template_editor),
    activity: ActivityLog = Depends(get_activity_log)
):
    template = await get_owned_or_404(db, JobTemplate, template_id, current_user, "Job template")
    await db.delete(template)
    await db.commit()
    await activity.log("delete", RESOURCE, template_id, {"name": template.name})
