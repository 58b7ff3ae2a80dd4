"""Notice Service — bilingual announcements managed by admins.

Invariants:
    - Public reads only ever see published notices
    - published_at is set when a notice is published, cleared when unpublished
    - Publishing an already published notice keeps its original published_at
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from curator.core.errors import ResourceNotFoundError
from curator.db.base import utcnow
from curator.models.notice import Notice
from curator.schemas.notice import NoticeCreate, NoticeUpdate

logger = logging.getLogger(__name__)


async def list_notices(db: AsyncSession, include_drafts: bool = False) -> list[Notice]:
    query = select(Notice)
    if include_drafts:
        query = query.order_by(Notice.created_at.desc())
    else:
        query = (
            query.where(Notice.is_published.is_(True))
            .order_by(Notice.published_at.desc())
        )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_notice(
    db: AsyncSession, notice_id: UUID, include_drafts: bool = False,
) -> Notice:
    notice = await db.get(Notice, notice_id)
    if notice is None or (not notice.is_published and not include_drafts):
        raise ResourceNotFoundError("Notice", str(notice_id))
    return notice


def _apply_publish(notice: Notice, is_published: bool) -> None:
    if is_published and not notice.is_published:
        notice.published_at = utcnow()
    elif not is_published:
        notice.published_at = None
    notice.is_published = is_published


async def create_notice(
    db: AsyncSession, author_id: str, body: NoticeCreate,
) -> Notice:
    notice = Notice(
        title_ko=body.title_ko,
        content_ko=body.content_ko,
        title_en=body.title_en or None,
        content_en=body.content_en or None,
        author_id=author_id,
        is_published=False,
    )
    _apply_publish(notice, body.is_published)
    db.add(notice)
    await db.commit()
    await db.refresh(notice)
    logger.info("Notice created", extra={"user_id": author_id})
    return notice


async def update_notice(
    db: AsyncSession, notice: Notice, body: NoticeUpdate,
) -> Notice:
    for name in body.model_fields_set:
        value = getattr(body, name)
        if name in ("title_ko", "content_ko") and value is None:
            continue
        setattr(notice, name, value)
    await db.commit()
    await db.refresh(notice)
    return notice


async def set_published(
    db: AsyncSession, notice: Notice, is_published: bool,
) -> Notice:
    _apply_publish(notice, is_published)
    await db.commit()
    await db.refresh(notice)
    return notice


async def delete_notice(db: AsyncSession, notice: Notice) -> None:
    await db.delete(notice)
    await db.commit()
