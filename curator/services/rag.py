"""RAG Context — reference-sample retrieval injected into generation prompts.

Invariants:
    - Returns at most MAX_SAMPLES newest samples of the content type, joined by blank lines
    - Result capped at MAX_CONTEXT_CHARS
    - Never raises: no samples or any DB failure yields "" (generation proceeds unstyled)

Design Decisions:
    - Recency over similarity: samples are few and curated, no embeddings needed yet
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from curator.models.reference_sample import ReferenceSample

logger = logging.getLogger(__name__)

MAX_SAMPLES = 3
MAX_CONTEXT_CHARS = 2000


async def get_rag_context(db: AsyncSession, content_type: str | None) -> str:
    if not content_type:
        return ""
    try:
        result = await db.execute(
            select(ReferenceSample.text)
            .where(ReferenceSample.content_type == content_type)
            .order_by(ReferenceSample.created_at.desc())
            .limit(MAX_SAMPLES),
        )
        texts = [t for t in result.scalars().all() if t]
    except SQLAlchemyError as e:
        logger.warning(
            "RAG lookup failed: %s", e, extra={"content_type": content_type},
        )
        return ""
    return "\n\n".join(texts)[:MAX_CONTEXT_CHARS]
