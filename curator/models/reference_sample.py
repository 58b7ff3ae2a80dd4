"""ReferenceSample ORM — curated example texts injected into prompts as style references.

Invariants:
    - content_type uses the same vocabulary as exhibition_content.content_type
    - Read-only at runtime; rows are loaded by operators, not by the API
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from curator.db.base import Base, utcnow


class ReferenceSample(Base):
    __tablename__ = "reference_samples"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    content_type: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
