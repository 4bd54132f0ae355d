"""
Office endpoints.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from careers.api.auth import get_current_user, require_admin
from careers.api.scoping import get_owned_or_404
from careers.database import get_db
from careers.models.office import Office
from careers.models.user import User
from careers.schemas.office import OfficeCreate, OfficeResponse, OfficeUpdate

logger = logging.getLogger(__name__)
router = APIRouter()


async def _clear_main(db: AsyncSession, company_id) -> None:
    await db.execute(
        update(Office).where(Office.company_id == company_id).values(is_main=False)
    )


@router.get("", response_model=list[OfficeResponse])
async def list_offices(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    result = await db.execute(
        select(Office)
        .where(Office.company_id == current_user.company_id)
        .order_by(Office.is_main.desc(), Office.name)
    )
    return result.scalars().all()


@router.get("/main", response_model=OfficeResponse)
async def get_main_office(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """The headquarters office."""
    result = await db.execute(
        select(Office).where(Office.company_id == current_user.company_id, Office.is_main.is_(True))
    )
    office = result.scalar_one_or_none()
    if not office:
        raise HTTPException(status_code=404, detail="No main office configured")
    return office


@router.get("/{office_id}", response_model=OfficeResponse)
async def get_office(
    office_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await get_owned_or_404(db, Office, office_id, current_user, "Office")


@router.post("", response_model=OfficeResponse, status_code=201)
async def create_office(
    data: OfficeCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Create an office. Marking it main unmarks the previous main office."""
    if data.is_main:
        await _clear_main(db, admin.company_id)

    office = Office(company_id=admin.company_id, **data.model_dump())
    db.add(office)
    await db.commit()
    await db.refresh(office)

    logger.info(f"Created office {office.name} for company {admin.company_id}")
    return office


@router.patch("/{office_id}", response_model=OfficeResponse)
async def update_office(
    office_id: UUID,
    data: OfficeUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    office = await get_owned_or_404(db, Office, office_id, admin, "Office")
    fields = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    if fields.get("is_main"):
        await _clear_main(db, admin.company_id)

    for field, value in fields.items():
        setattr(office, field, value)

    await db.commit()
    await db.refresh(office)
    return office


@router.delete("/{office_id}", status_code=204)
async def delete_office(
    office_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
):
    office = await get_owned_or_404(db, Office, office_id, admin, "Office")
    await db.delete(office)
    await db.commit()
    logger.info(f"Deleted office {office_id}")
