"""ExhibitionContent ORM — one generated text block (introduction, preface, ...).

Invariants:
    - (exhibition_id, content_type) identifies the block for upserts
    - version starts at 1 and increments on every upsert of an existing block
    - content is JSON; generated text is stored as {"text": ...}

Design Decisions:
    - No unique constraint on (exhibition_id, content_type): chat completions append
      history rows, while upserts target the newest row of that type
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from curator.db.base import Base, utcnow


class ExhibitionContent(Base):
    """Generated content block."""
    __tablename__ = "exhibition_content"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    exhibition_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("exhibitions.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    content_type: Mapped[str] = mapped_column(String(50), nullable=False)
    content: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
        onupdate=utcnow,
    )

    exhibition: Mapped["Exhibition"] = relationship(
        "Exhibition", back_populates="contents",
    )
