"""Analysis Routes — vision-model reading of artwork images."""

import logging

from fastapi import APIRouter, Depends

from curator.api.dependencies import get_current_user, get_llm_client
from curator.core.errors import ErrorContext
from curator.infrastructure.anthropic_client import ResilientAnthropicClient
from curator.infrastructure.auth_provider import AuthUser
from curator.schemas.generation import ImageUrlsRequest
from curator.services.image_analysis import ImageAnalyzer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/analyze", tags=["analyze"])


@router.post("/images")
async def analyze_images(
    body: ImageUrlsRequest,
    user: AuthUser = Depends(get_current_user),
    llm: ResilientAnthropicClient = Depends(get_llm_client),
):
    """Per-image analysis plus up to 15 aggregated keywords."""
    ctx = ErrorContext(user_id=user.id)
    return await ImageAnalyzer(llm).analyze_images(body.image_urls, body.locale, ctx)


@router.post("/poster-style")
async def analyze_poster_style(
    body: ImageUrlsRequest,
    user: AuthUser = Depends(get_current_user),
    llm: ResilientAnthropicClient = Depends(get_llm_client),
):
    ctx = ErrorContext(user_id=user.id)
    return await ImageAnalyzer(llm).analyze_poster_style(body.image_urls, ctx)
