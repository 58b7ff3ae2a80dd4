"""Artwork Service — upload, edit and removal of an exhibition's artworks.

Invariants:
    - Only the exhibition owner may touch its artworks (403 otherwise, including
      unknown artwork ids: existence is not revealed)
    - New artworks get order_index = max + 1 (0 for the first)
    - An upload whose row insert fails is removed from storage again
    - Row deletion wins over storage deletion: a failed object delete is logged only
    - Storage objects still referenced by another artwork row (duplicates share
      image URLs) are never deleted
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from curator.core.domain_types import Locale
from curator.core.errors import DatabaseError, ErrorContext, PermissionDeniedError
from curator.infrastructure.object_storage import (
    ObjectStorageClient,
    generate_object_name,
)
from curator.models.artwork import Artwork
from curator.models.exhibition import Exhibition
from curator.services import prompts

logger = logging.getLogger(__name__)


async def next_order_index(db: AsyncSession, exhibition_id: UUID) -> int:
    result = await db.execute(
        select(func.max(Artwork.order_index))
        .where(Artwork.exhibition_id == exhibition_id),
    )
    current = result.scalar_one_or_none()
    return 0 if current is None else current + 1


async def add_artwork(
    db: AsyncSession,
    storage: ObjectStorageClient,
    exhibition: Exhibition,
    *,
    filename: str | None,
    data: bytes,
    content_type: str | None,
    title: str | None,
    locale: Locale = Locale.KO,
) -> Artwork:
    """Upload the image, then insert the row; undo the upload if the insert fails."""
    object_name = generate_object_name(filename)
    image_url = await storage.upload(object_name, data, content_type)

    order_index = await next_order_index(db, exhibition.id)
    artwork = Artwork(
        exhibition_id=exhibition.id,
        image_url=image_url,
        title=(title or "").strip()
        or prompts.for_locale(locale).default_artwork_title(order_index + 1),
        order_index=order_index,
    )
    db.add(artwork)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            "Artwork insert failed, removing upload %s: %s", object_name, e,
            extra={"exhibition_id": str(exhibition.id)},
        )
        await storage.delete_images([image_url])
        raise DatabaseError("Failed to save artwork", "insert")
    await db.refresh(artwork)
    return artwork


async def unreferenced_urls(db: AsyncSession, urls: list[str]) -> list[str]:
    """URLs no artwork row points at any more; call after the delete is committed."""
    if not urls:
        return []
    result = await db.execute(
        select(Artwork.image_url).where(Artwork.image_url.in_(urls)).distinct(),
    )
    still_used = set(result.scalars().all())
    return [u for u in dict.fromkeys(urls) if u not in still_used]


async def get_owned_artwork(
    db: AsyncSession, exhibition_id: UUID, artwork_id: UUID, user_id: str,
) -> Artwork:
    artwork = await db.get(Artwork, artwork_id)
    exhibition = (
        await db.get(Exhibition, artwork.exhibition_id)
        if artwork is not None else None
    )
    if (
        artwork is None
        or artwork.exhibition_id != exhibition_id
        or exhibition is None
        or exhibition.user_id != user_id
    ):
        raise PermissionDeniedError(
            "Artwork not found or not owned by caller",
            ErrorContext(exhibition_id=str(exhibition_id), user_id=user_id),
        )
    return artwork


async def update_artwork(
    db: AsyncSession,
    artwork: Artwork,
    title: str,
    description: str | None,
    description_sent: bool,
) -> Artwork:
    """Set the title; the description only when sent (empty string clears it)."""
    artwork.title = title
    if description_sent:
        artwork.description = description or None
    await db.commit()
    await db.refresh(artwork)
    return artwork


async def delete_artwork(
    db: AsyncSession, storage: ObjectStorageClient, artwork: Artwork,
) -> None:
    image_url = artwork.image_url
    await db.delete(artwork)
    await db.commit()
    orphaned = await unreferenced_urls(db, [image_url])
    if not orphaned:
        logger.info("Image still referenced by another artwork, kept: %s", image_url)
        return
    summary = await storage.delete_images(orphaned)
    if not summary.success:
        logger.warning("Failed to delete image from storage: %s", image_url)
