"""Chat Schemas — streamed curator conversation request.

Invariants:
    - At least one message; roles limited to user/assistant (system prompt is server-built)
    - step is free text: unknown steps fall back to the generic curator prompt
"""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from curator.core.domain_types import Locale
from curator.schemas.common import LocaleField


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(max_length=20_000)


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(min_length=1)
    exhibition_id: UUID | None = None
    step: str | None = Field(None, max_length=50)
    data: dict = Field(default_factory=dict)
    locale: LocaleField = Locale.KO
