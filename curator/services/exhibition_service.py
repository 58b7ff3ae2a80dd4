"""Exhibition Service — ownership checks, CRUD, duplication and content blocks.

Invariants:
    - Hidden exhibitions (private and not owned) are reported as 404, never 403
    - Owner-only mutations raise 403 or 404 as the calling route dictates (deny=...)
    - Duplicate inserts exhibition + content + artworks in ONE commit
    - Content upsert is keyed by (exhibition_id, content_type); updates bump version
    - JSON columns are reassigned, never mutated in place

Design Decisions:
    - Service functions take the AsyncSession explicitly and commit themselves:
      routes stay thin, tests call services directly
    - Storage cleanup after delete is best-effort: DB state wins, failures logged.
      Images shared with a duplicate stay in storage while any row uses them
"""

import logging
from typing import Literal
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from curator.core.domain_types import ExhibitionStatus, Locale
from curator.core.errors import (
    ErrorContext,
    PermissionDeniedError,
    ResourceNotFoundError,
)
from curator.core.gallery_layout import build_gallery_layout
from curator.db.base import utcnow
from curator.infrastructure.object_storage import ObjectStorageClient
from curator.models.artwork import Artwork
from curator.models.exhibition import Exhibition
from curator.models.exhibition_content import ExhibitionContent
from curator.models.virtual_exhibition import VirtualExhibition
from curator.services.artwork_service import unreferenced_urls
from curator.schemas.exhibition import (
    ExhibitionCreate,
    ExhibitionUpdate,
    VirtualExhibitionCreate,
)
from curator.services import prompts

logger = logging.getLogger(__name__)

Deny = Literal["forbidden", "not_found"]

_METADATA_FIELDS = (
    "artist_name", "venue", "location", "exhibition_date",
    "exhibition_end_date", "opening_hours", "admission_fee",
)


# ─── Lookup & access checks ──────────────────────────────────────

async def get_exhibition_or_404(
    db: AsyncSession, exhibition_id: UUID,
) -> Exhibition:
    exhibition = await db.get(Exhibition, exhibition_id)
    if exhibition is None:
        raise ResourceNotFoundError("Exhibition", str(exhibition_id))
    return exhibition


async def get_visible_exhibition(
    db: AsyncSession, exhibition_id: UUID, viewer_id: str | None,
) -> Exhibition:
    """Public exhibitions are visible to anyone, private ones only to the owner."""
    exhibition = await get_exhibition_or_404(db, exhibition_id)
    if not exhibition.is_public and exhibition.user_id != viewer_id:
        raise ResourceNotFoundError("Exhibition", str(exhibition_id))
    return exhibition


async def get_owned_exhibition(
    db: AsyncSession,
    exhibition_id: UUID,
    user_id: str,
    deny: Deny = "forbidden",
) -> Exhibition:
    exhibition = await get_exhibition_or_404(db, exhibition_id)
    if exhibition.user_id != user_id:
        ctx = ErrorContext(exhibition_id=str(exhibition_id), user_id=user_id)
        if deny == "not_found":
            raise ResourceNotFoundError("Exhibition", str(exhibition_id), ctx)
        raise PermissionDeniedError(context=ctx)
    return exhibition


# ─── CRUD ────────────────────────────────────────────────────────

async def create_exhibition(
    db: AsyncSession, user_id: str, body: ExhibitionCreate,
) -> Exhibition:
    exhibition = Exhibition(
        user_id=user_id,
        title=body.title,
        keywords=list(body.keywords),
        status=ExhibitionStatus.DRAFT.value,
        is_public=False,
        **{f: getattr(body, f) for f in _METADATA_FIELDS},
    )
    db.add(exhibition)
    await db.commit()
    await db.refresh(exhibition)
    logger.info(
        "Exhibition created",
        extra={"exhibition_id": str(exhibition.id), "user_id": user_id},
    )
    return exhibition


async def list_user_exhibitions(
    db: AsyncSession, user_id: str, limit: int, offset: int,
) -> list[Exhibition]:
    result = await db.execute(
        select(Exhibition)
        .where(Exhibition.user_id == user_id)
        .order_by(Exhibition.created_at.desc())
        .limit(limit)
        .offset(offset),
    )
    return list(result.scalars().all())


async def list_public_exhibitions(
    db: AsyncSession, limit: int, offset: int,
) -> list[Exhibition]:
    result = await db.execute(
        select(Exhibition)
        .where(Exhibition.is_public.is_(True))
        .order_by(Exhibition.created_at.desc())
        .limit(limit)
        .offset(offset),
    )
    return list(result.scalars().all())


async def view_exhibition(
    db: AsyncSession, exhibition_id: UUID, viewer_id: str | None,
) -> Exhibition:
    """Visibility-checked fetch; counts a view when the viewer is not the owner."""
    exhibition = await get_visible_exhibition(db, exhibition_id, viewer_id)
    if exhibition.user_id != viewer_id:
        # Views must not bump updated_at (onupdate), so write it back unchanged
        await db.execute(
            update(Exhibition)
            .where(Exhibition.id == exhibition.id)
            .values(
                view_count=Exhibition.view_count + 1,
                updated_at=Exhibition.updated_at,
            )
            .execution_options(synchronize_session=False),
        )
        await db.commit()
        set_committed_value(
            exhibition, "view_count", (exhibition.view_count or 0) + 1,
        )
    return exhibition


async def update_exhibition(
    db: AsyncSession, exhibition: Exhibition, body: ExhibitionUpdate,
) -> Exhibition:
    """Apply the title plus every other field the client actually sent."""
    exhibition.title = body.title
    for name in body.model_fields_set - {"title"}:
        value = getattr(body, name)
        if name == "keywords":
            value = list(value or [])
        elif name in ("status", "is_public") and value is None:
            continue
        setattr(exhibition, name, value)
    exhibition.touch()
    await db.commit()
    await db.refresh(exhibition)
    return exhibition


async def delete_exhibition(
    db: AsyncSession, storage: ObjectStorageClient, exhibition: Exhibition,
) -> None:
    """Delete the row (children cascade), then the artwork images in storage."""
    image_urls = [a.image_url for a in exhibition.artworks if a.image_url]
    exhibition_id = str(exhibition.id)
    await db.delete(exhibition)
    await db.commit()

    image_urls = await unreferenced_urls(db, image_urls)
    if not image_urls:
        return
    summary = await storage.delete_images(image_urls)
    if not summary.success:
        logger.warning(
            "Storage cleanup incomplete: %d deleted, %d failed",
            summary.deleted_count, len(summary.failed_urls),
            extra={"exhibition_id": exhibition_id},
        )


async def duplicate_exhibition(
    db: AsyncSession, source: Exhibition, locale: Locale,
) -> Exhibition:
    """Copy exhibition, content blocks and artworks. Posters are not copied."""
    p = prompts.for_locale(locale)
    clone = Exhibition(
        user_id=source.user_id,
        title=f"{source.title or p.UNTITLED}{p.DUPLICATE_SUFFIX}",
        keywords=list(source.keywords or []),
        status=ExhibitionStatus.DRAFT.value,
        is_public=False,
        **{f: getattr(source, f) for f in _METADATA_FIELDS},
    )
    clone.contents = [
        ExhibitionContent(
            content_type=c.content_type,
            content=dict(c.content or {}),
        )
        for c in source.contents
    ]
    clone.artworks = [
        Artwork(
            title=a.title,
            description=a.description,
            image_url=a.image_url,
            order_index=a.order_index,
            aspect_ratio=a.aspect_ratio,
        )
        for a in source.artworks
    ]
    db.add(clone)
    await db.commit()
    await db.refresh(clone)
    logger.info(
        "Exhibition duplicated from %s", source.id,
        extra={"exhibition_id": str(clone.id), "user_id": source.user_id},
    )
    return clone


# ─── Content blocks ──────────────────────────────────────────────

async def upsert_content(
    db: AsyncSession,
    exhibition: Exhibition,
    content_type: str,
    content: dict,
) -> ExhibitionContent:
    """Insert or replace the block of this content_type; touches the exhibition."""
    result = await db.execute(
        select(ExhibitionContent)
        .where(
            ExhibitionContent.exhibition_id == exhibition.id,
            ExhibitionContent.content_type == content_type,
        )
        .order_by(ExhibitionContent.created_at.desc())
        .limit(1),
    )
    row = result.scalar_one_or_none()
    if row is None:
        row = ExhibitionContent(
            exhibition_id=exhibition.id,
            content_type=content_type,
            content=content,
        )
        db.add(row)
    else:
        row.content = content
        row.version = (row.version or 1) + 1
        row.updated_at = utcnow()
    exhibition.touch()
    await db.commit()
    await db.refresh(row)
    return row


async def insert_content(
    db: AsyncSession, exhibition_id: UUID, content_type: str, content: dict,
) -> ExhibitionContent:
    """Append a new block without replacing earlier ones (chat history of drafts)."""
    row = ExhibitionContent(
        exhibition_id=exhibition_id,
        content_type=content_type,
        content=content,
    )
    db.add(row)
    await db.commit()
    return row


async def list_contents(
    db: AsyncSession, exhibition_id: UUID,
) -> list[ExhibitionContent]:
    result = await db.execute(
        select(ExhibitionContent)
        .where(ExhibitionContent.exhibition_id == exhibition_id)
        .order_by(ExhibitionContent.created_at),
    )
    return list(result.scalars().all())


def latest_contents(contents: list[ExhibitionContent]) -> dict[str, dict]:
    """Newest block per content_type (chat may have inserted several)."""
    latest: dict[str, ExhibitionContent] = {}
    for row in contents:
        current = latest.get(row.content_type)
        if current is None or row.updated_at >= current.updated_at:
            latest[row.content_type] = row
    return {k: v.content for k, v in latest.items()}


async def append_conversation(
    db: AsyncSession, exhibition_id: UUID, entries: list[dict],
) -> None:
    exhibition = await get_exhibition_or_404(db, exhibition_id)
    exhibition.curator_conversation = [
        *(exhibition.curator_conversation or []), *entries,
    ]
    await db.commit()


# ─── Virtual gallery ─────────────────────────────────────────────

async def create_virtual_exhibition(
    db: AsyncSession, exhibition: Exhibition, body: VirtualExhibitionCreate,
) -> VirtualExhibition:
    """Create the gallery row and its artworks, then publish the exhibition."""
    p = prompts.for_locale(body.locale)
    virtual = VirtualExhibition(
        exhibition_id=exhibition.id,
        template_type=body.template_type,
        settings=dict(body.settings),
    )
    db.add(virtual)
    for index, item in enumerate(body.artworks):
        db.add(Artwork(
            exhibition_id=exhibition.id,
            title=item.title or p.default_artwork_title(index + 1),
            description=item.description or "",
            image_url=item.image_url,
            order_index=item.order if item.order is not None else index,
            aspect_ratio=item.aspect_ratio or 1.0,
        ))
    exhibition.status = ExhibitionStatus.COMPLETE.value
    exhibition.is_public = True
    exhibition.touch()
    await db.commit()
    await db.refresh(virtual)
    logger.info(
        "Virtual exhibition created",
        extra={
            "exhibition_id": str(exhibition.id),
            "artwork_count": len(body.artworks),
        },
    )
    return virtual


def gallery_layout(exhibition: Exhibition) -> dict:
    artworks = sorted(exhibition.artworks, key=lambda a: a.order_index)
    return build_gallery_layout(
        [str(a.id) for a in artworks],
        [a.aspect_ratio or 1.0 for a in artworks],
    )


# ─── Member stats ────────────────────────────────────────────────

async def member_stats(db: AsyncSession, user_id: str) -> dict:
    result = await db.execute(
        select(
            func.count(Exhibition.id),
            func.count(Exhibition.id).filter(Exhibition.is_public.is_(True)),
            func.coalesce(func.sum(Exhibition.view_count), 0),
        ).where(Exhibition.user_id == user_id),
    )
    total, public, views = result.one()
    return {
        "total_exhibitions": total or 0,
        "public_exhibitions": public or 0,
        "total_views": int(views or 0),
    }
