"""Contact Routes — public inquiry form plus the admin inbox."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from curator.api.dependencies import require_admin
from curator.infrastructure.database import get_db
from curator.schemas.contact import ContactCreate, ContactResponse
from curator.services import inbox_service

router = APIRouter(prefix="/api/v1/contact", tags=["contact"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_contact(body: ContactCreate, db: AsyncSession = Depends(get_db)):
    await inbox_service.submit_inquiry(db, body)
    return {"success": True}


@router.get(
    "", response_model=list[ContactResponse], dependencies=[Depends(require_admin)],
)
async def list_contact(db: AsyncSession = Depends(get_db)):
    return await inbox_service.list_inquiries(db)


@router.post(
    "/{inquiry_id}/read",
    response_model=ContactResponse,
    dependencies=[Depends(require_admin)],
)
async def mark_contact_read(inquiry_id: UUID, db: AsyncSession = Depends(get_db)):
    return await inbox_service.mark_inquiry_read(db, inquiry_id)


@router.delete(
    "/{inquiry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_contact(inquiry_id: UUID, db: AsyncSession = Depends(get_db)):
    await inbox_service.delete_inquiry(db, inquiry_id)
