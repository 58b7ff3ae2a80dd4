"""Chat Route — streamed curator conversation.

Invariants:
    - Caller must be authenticated; an exhibition_id must belong to the caller (404 otherwise)
    - Response is text/event-stream: text_delta events then done
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from curator.api.dependencies import get_current_user, get_llm_client
from curator.api.routes.stream_helpers import sse_response
from curator.infrastructure.anthropic_client import ResilientAnthropicClient
from curator.infrastructure.auth_provider import AuthUser
from curator.infrastructure.database import get_db
from curator.schemas.chat import ChatRequest
from curator.services import exhibition_service
from curator.services.chat_runner import CuratorChatRunner

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/chat", tags=["chat"])


@router.post("")
async def chat(
    body: ChatRequest,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    llm: ResilientAnthropicClient = Depends(get_llm_client),
):
    if body.exhibition_id:
        await exhibition_service.get_owned_exhibition(
            db, body.exhibition_id, user.id, deny="not_found",
        )
    runner = CuratorChatRunner(db, llm)
    return sse_response(runner.chat(body, user.id), "chat")
