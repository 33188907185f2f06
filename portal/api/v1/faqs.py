"""FAQ endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.exceptions import NotFound
from portal.core.security import AdminContext, require_admin
from portal.db.session import get_db
from portal.models.faq import Faq
from portal.schemas.faq import FaqCreate, FaqResponse

router = APIRouter()


@router.get("/", response_model=List[FaqResponse])
async def list_faqs(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Faq).order_by(Faq.created_at.desc()))
    return result.scalars().all()


@router.post("/", response_model=FaqResponse, status_code=status.HTTP_201_CREATED)
async def create_faq(
    fields: FaqCreate,
    admin: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    faq = Faq(question=fields.question, answer=fields.answer)
    db.add(faq)
    await db.flush()
    await db.refresh(faq)
    return faq


@router.delete("/{faq_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_faq(
    faq_id: UUID,
    admin: AdminContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    faq = await db.get(Faq, faq_id)
    if faq is None:
        raise NotFound("FAQ", faq_id)
    await db.delete(faq)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
