"""Exhibition Routes — CRUD, content blocks, regeneration, artworks and gallery.

Invariants:
    - Private exhibitions are invisible (404) to everyone but the owner
    - PATCH/DELETE of a foreign exhibition answer 404; content, artwork, duplicate,
      regenerate and virtual endpoints answer 403
    - Regenerate streams SSE like /chat

Design Decisions:
    - Thin routes: access checks + persistence live in exhibition_service / artwork_service
    - Document export served as an HTML attachment (browser prints it to PDF)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from curator.api.dependencies import (
    get_current_user,
    get_llm_client,
    get_optional_user,
    get_storage,
)
from curator.api.routes.stream_helpers import sse_response
from curator.core.domain_types import Locale
from curator.infrastructure.anthropic_client import ResilientAnthropicClient
from curator.infrastructure.auth_provider import AuthUser
from curator.infrastructure.database import get_db
from curator.infrastructure.object_storage import ObjectStorageClient
from curator.schemas.exhibition import (
    ArtworkResponse,
    ArtworkUpdate,
    ContentResponse,
    ContentUpsert,
    DuplicateRequest,
    ExhibitionCreate,
    ExhibitionDetail,
    ExhibitionList,
    ExhibitionResponse,
    ExhibitionUpdate,
    RegenerateRequest,
    VirtualExhibitionCreate,
    VirtualExhibitionResponse,
)
from curator.services import artwork_service, exhibition_service
from curator.services.chat_runner import CuratorChatRunner
from curator.services.document_export import render_exhibition_document

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/exhibitions", tags=["exhibitions"])


# ─── Exhibitions ─────────────────────────────────────────────────

@router.post(
    "", response_model=ExhibitionResponse, status_code=status.HTTP_201_CREATED,
)
async def create_exhibition(
    body: ExhibitionCreate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await exhibition_service.create_exhibition(db, user.id, body)


@router.get("", response_model=ExhibitionList)
async def list_my_exhibitions(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    items = await exhibition_service.list_user_exhibitions(db, user.id, limit, offset)
    return ExhibitionList(
        items=[ExhibitionResponse.model_validate(e) for e in items],
        limit=limit, offset=offset,
    )


@router.get("/public", response_model=ExhibitionList)
async def list_public_exhibitions(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    items = await exhibition_service.list_public_exhibitions(db, limit, offset)
    return ExhibitionList(
        items=[ExhibitionResponse.model_validate(e) for e in items],
        limit=limit, offset=offset,
    )


@router.get("/{exhibition_id}", response_model=ExhibitionDetail)
async def get_exhibition(
    exhibition_id: UUID,
    user: AuthUser | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    return await exhibition_service.view_exhibition(
        db, exhibition_id, user.id if user else None,
    )


@router.patch("/{exhibition_id}", response_model=ExhibitionResponse)
async def update_exhibition(
    exhibition_id: UUID,
    body: ExhibitionUpdate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exhibition = await exhibition_service.get_owned_exhibition(
        db, exhibition_id, user.id, deny="not_found",
    )
    return await exhibition_service.update_exhibition(db, exhibition, body)


@router.delete("/{exhibition_id}")
async def delete_exhibition(
    exhibition_id: UUID,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorageClient = Depends(get_storage),
):
    exhibition = await exhibition_service.get_owned_exhibition(
        db, exhibition_id, user.id, deny="not_found",
    )
    await exhibition_service.delete_exhibition(db, storage, exhibition)
    return {"success": True}


@router.post(
    "/{exhibition_id}/duplicate",
    response_model=ExhibitionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_exhibition(
    exhibition_id: UUID,
    body: DuplicateRequest | None = None,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    source = await exhibition_service.get_owned_exhibition(db, exhibition_id, user.id)
    locale = body.locale if body else Locale.KO
    return await exhibition_service.duplicate_exhibition(db, source, locale)


# ─── Content blocks ──────────────────────────────────────────────

@router.get("/{exhibition_id}/content", response_model=list[ContentResponse])
async def list_content(
    exhibition_id: UUID,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await exhibition_service.get_owned_exhibition(db, exhibition_id, user.id)
    return await exhibition_service.list_contents(db, exhibition_id)


@router.post("/{exhibition_id}/content", response_model=ContentResponse)
async def upsert_content(
    exhibition_id: UUID,
    body: ContentUpsert,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exhibition = await exhibition_service.get_owned_exhibition(
        db, exhibition_id, user.id,
    )
    return await exhibition_service.upsert_content(
        db, exhibition, body.content_type, body.content,
    )


@router.post("/{exhibition_id}/regenerate")
async def regenerate_content(
    exhibition_id: UUID,
    body: RegenerateRequest,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    llm: ResilientAnthropicClient = Depends(get_llm_client),
):
    """Stream a fresh version of one content block, then upsert it."""
    exhibition = await exhibition_service.get_owned_exhibition(
        db, exhibition_id, user.id,
    )
    exhibition_data = {
        "title": exhibition.title,
        "keywords": exhibition.keywords,
        "artist_name": exhibition.artist_name,
        "exhibition_date": exhibition.exhibition_date,
        "exhibition_end_date": exhibition.exhibition_end_date,
        "venue": exhibition.venue,
        "location": exhibition.location,
        **body.exhibition_data,
    }
    runner = CuratorChatRunner(db, llm)
    return sse_response(
        runner.regenerate(exhibition, body.content_type, exhibition_data, body.locale),
        "regenerate",
    )


# ─── Artworks ────────────────────────────────────────────────────

@router.post(
    "/{exhibition_id}/artworks",
    response_model=ArtworkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_artwork(
    exhibition_id: UUID,
    file: UploadFile = File(...),
    title: str | None = Form(None),
    locale: str | None = Form(None),
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorageClient = Depends(get_storage),
):
    exhibition = await exhibition_service.get_owned_exhibition(
        db, exhibition_id, user.id,
    )
    data = await file.read()
    return await artwork_service.add_artwork(
        db, storage, exhibition,
        filename=file.filename,
        data=data,
        content_type=file.content_type,
        title=title,
        locale=Locale.coerce(locale),
    )


@router.patch(
    "/{exhibition_id}/artworks/{artwork_id}", response_model=ArtworkResponse,
)
async def update_artwork(
    exhibition_id: UUID,
    artwork_id: UUID,
    body: ArtworkUpdate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    artwork = await artwork_service.get_owned_artwork(
        db, exhibition_id, artwork_id, user.id,
    )
    return await artwork_service.update_artwork(
        db, artwork, body.title, body.description,
        description_sent="description" in body.model_fields_set,
    )


@router.delete("/{exhibition_id}/artworks/{artwork_id}")
async def delete_artwork(
    exhibition_id: UUID,
    artwork_id: UUID,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorageClient = Depends(get_storage),
):
    artwork = await artwork_service.get_owned_artwork(
        db, exhibition_id, artwork_id, user.id,
    )
    await artwork_service.delete_artwork(db, storage, artwork)
    return {"success": True}


# ─── Virtual gallery ─────────────────────────────────────────────

@router.post(
    "/{exhibition_id}/virtual",
    response_model=VirtualExhibitionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_virtual_exhibition(
    exhibition_id: UUID,
    body: VirtualExhibitionCreate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    exhibition = await exhibition_service.get_owned_exhibition(
        db, exhibition_id, user.id,
    )
    return await exhibition_service.create_virtual_exhibition(db, exhibition, body)


@router.get("/{exhibition_id}/gallery-layout")
async def get_gallery_layout(
    exhibition_id: UUID,
    user: AuthUser | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    exhibition = await exhibition_service.get_visible_exhibition(
        db, exhibition_id, user.id if user else None,
    )
    return exhibition_service.gallery_layout(exhibition)


@router.get("/{exhibition_id}/document", response_class=HTMLResponse)
async def export_document(
    exhibition_id: UUID,
    locale: str | None = Query(None),
    user: AuthUser | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    exhibition = await exhibition_service.get_visible_exhibition(
        db, exhibition_id, user.id if user else None,
    )
    document = render_exhibition_document(exhibition, Locale.coerce(locale))
    return HTMLResponse(
        document,
        headers={
            "Content-Disposition":
                f'attachment; filename="exhibition-{exhibition_id}.html"',
        },
    )
