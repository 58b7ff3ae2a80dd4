"""Generation Routes — one-shot text generation and poster endpoints.

Invariants:
    - Every endpoint requires an authenticated caller (model calls cost money)
    - Generation failures surface as 503 (AnthropicAPIError) / 502 (ImageGenerationError)
    - Poster URLs are appended to an exhibition only for its owner

Design Decisions:
    - RAG context looked up per request by content type; empty context is fine
    - Thin routes: ContentGenerator owns prompts and parsing
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from curator.api.dependencies import (
    get_current_user,
    get_image_client,
    get_llm_client,
    get_optional_user,
)
from curator.core.errors import ErrorContext
from curator.infrastructure.anthropic_client import ResilientAnthropicClient
from curator.infrastructure.auth_provider import AuthUser
from curator.infrastructure.database import get_db
from curator.infrastructure.image_client import PosterImageClient
from curator.schemas.generation import (
    ArtistBioRequest,
    ArtworkDescriptionsRequest,
    ConversationSummaryRequest,
    MarketingReportRequest,
    PosterImageRequest,
    PosterPlaceholderRequest,
    PressReleaseRequest,
    TextRequest,
    TitlesRequest,
)
from curator.services import exhibition_service, poster_service
from curator.services.content_generator import ContentGenerator
from curator.services.rag import get_rag_context

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/generate", tags=["generate"])


def get_generator(
    llm: ResilientAnthropicClient = Depends(get_llm_client),
) -> ContentGenerator:
    return ContentGenerator(llm)


@router.post("/titles")
async def generate_titles(
    body: TitlesRequest,
    user: AuthUser = Depends(get_current_user),
    generator: ContentGenerator = Depends(get_generator),
):
    return await generator.titles(
        body.keywords, body.artwork_descriptions,
        body.conversation_context, body.locale,
    )


@router.post("/introduction")
async def generate_introduction(
    body: TextRequest,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_generator),
):
    rag = await get_rag_context(db, "introduction")
    return await generator.introduction(body.title, body.keywords, body.locale, rag)


@router.post("/preface")
async def generate_preface(
    body: TextRequest,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_generator),
):
    rag = await get_rag_context(db, "preface")
    return await generator.preface(body.title, body.keywords, body.locale, rag)


@router.post("/artist-bio")
async def generate_artist_bio(
    body: ArtistBioRequest,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_generator),
):
    rag = await get_rag_context(db, "artistBio")
    return await generator.artist_bio(
        body.artist_name, body.keywords, body.title, body.locale, rag,
    )


@router.post("/artwork-descriptions")
async def generate_artwork_descriptions(
    body: ArtworkDescriptionsRequest,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_generator),
):
    rag = await get_rag_context(db, "artwork_description")
    return await generator.artwork_descriptions(
        body.artworks, body.title, body.keywords, body.locale, rag,
    )


@router.post("/marketing-report")
async def generate_marketing_report(
    body: MarketingReportRequest,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_generator),
):
    rag = await get_rag_context(db, "marketingReport")
    return await generator.marketing_report(body.exhibition_data(), body.locale, rag)


@router.post("/press-release")
async def generate_press_release(
    body: PressReleaseRequest,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_generator),
):
    rag = await get_rag_context(db, "pressRelease")
    return await generator.press_release(
        body.model_dump(exclude={"locale"}), body.locale, rag,
    )


@router.post("/conversation-summary")
async def summarize_conversation(
    body: ConversationSummaryRequest,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_generator),
):
    """Organize the stored curator conversation for the planning document."""
    exhibition = await exhibition_service.get_owned_exhibition(
        db, body.exhibition_id, user.id, deny="not_found",
    )
    conversation = exhibition.curator_conversation or []
    if not conversation:
        return {"summary": ""}
    return await generator.conversation_summary(
        conversation, exhibition.title or "", body.locale,
        context=ErrorContext(exhibition_id=str(exhibition.id), user_id=user.id),
    )


# ─── Posters ─────────────────────────────────────────────────────

@router.post("/poster")
async def placeholder_poster(
    body: PosterPlaceholderRequest,
    user: AuthUser = Depends(get_current_user),
):
    return poster_service.placeholder_poster(body.main_image)


@router.post("/poster-image")
async def generate_poster_image(
    body: PosterImageRequest,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    image_client: PosterImageClient = Depends(get_image_client),
):
    exhibition = None
    if body.exhibition_id:
        exhibition = await exhibition_service.get_owned_exhibition(
            db, body.exhibition_id, user.id, deny="not_found",
        )
    return await poster_service.generate_poster(
        db, image_client,
        title=body.title,
        artist_name=body.artist_name,
        style=body.style,
        keywords=body.keywords,
        exhibition=exhibition,
    )


@router.get("/poster-image")
async def list_posters(
    exhibition_id: UUID = Query(...),
    user: AuthUser | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    exhibition = await exhibition_service.get_visible_exhibition(
        db, exhibition_id, user.id if user else None,
    )
    return {"posters": list(exhibition.posters or [])}
