"""Notice Routes — published announcements for everyone, management for admins.

Invariants:
    - Anonymous and non-admin callers only see published notices
    - include_drafts=true is honoured for admins only (ignored otherwise)
    - /translate is declared before /{notice_id} so it is never parsed as an id

Design Decisions:
    - Translation runs the blocking deep-translator client in a worker thread
"""

import asyncio
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from curator.api.dependencies import get_optional_user, require_admin
from curator.infrastructure.auth_provider import AuthUser
from curator.infrastructure.database import get_db
from curator.schemas.notice import (
    NoticeCreate,
    NoticePublish,
    NoticeResponse,
    NoticeTranslateRequest,
    NoticeTranslation,
    NoticeUpdate,
)
from curator.services import notice_service
from curator.services.translate_notice import translate_notice

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/notices", tags=["notices"])


def _is_admin(user: AuthUser | None) -> bool:
    return user is not None and user.is_admin


@router.get("", response_model=list[NoticeResponse])
async def list_notices(
    include_drafts: bool = Query(False),
    user: AuthUser | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    return await notice_service.list_notices(
        db, include_drafts=include_drafts and _is_admin(user),
    )


@router.post("/translate", response_model=NoticeTranslation)
async def translate(
    body: NoticeTranslateRequest,
    admin: AuthUser = Depends(require_admin),
):
    """Korean title + HTML body → English, markup preserved."""
    result = await asyncio.to_thread(translate_notice, body.title, body.content)
    return NoticeTranslation(**result)


@router.post(
    "", response_model=NoticeResponse, status_code=status.HTTP_201_CREATED,
)
async def create_notice(
    body: NoticeCreate,
    admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await notice_service.create_notice(db, admin.id, body)


@router.get("/{notice_id}", response_model=NoticeResponse)
async def get_notice(
    notice_id: UUID,
    user: AuthUser | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    return await notice_service.get_notice(
        db, notice_id, include_drafts=_is_admin(user),
    )


@router.put("/{notice_id}", response_model=NoticeResponse)
async def update_notice(
    notice_id: UUID,
    body: NoticeUpdate,
    admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    notice = await notice_service.get_notice(db, notice_id, include_drafts=True)
    return await notice_service.update_notice(db, notice, body)


@router.post("/{notice_id}/publish", response_model=NoticeResponse)
async def publish_notice(
    notice_id: UUID,
    body: NoticePublish,
    admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    notice = await notice_service.get_notice(db, notice_id, include_drafts=True)
    notice = await notice_service.set_published(db, notice, body.is_published)
    logger.info(
        "Notice %s %s", notice_id,
        "published" if notice.is_published else "unpublished",
        extra={"user_id": admin.id},
    )
    return notice


@router.delete("/{notice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notice(
    notice_id: UUID,
    admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    notice = await notice_service.get_notice(db, notice_id, include_drafts=True)
    await notice_service.delete_notice(db, notice)
