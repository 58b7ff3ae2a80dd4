"""Artwork ORM — one uploaded image belonging to an exhibition.

Invariants:
    - Always belongs to an Exhibition (exhibition_id FK, cascade delete)
    - order_index is 0-based; new uploads take max + 1
    - aspect_ratio = width / height, 1.0 when unknown

Design Decisions:
    - image_url stores the public URL; the storage key is derived from it on delete
"""

import uuid
from datetime import datetime

from sqlalchemy import Text, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from curator.db.base import Base, utcnow


class Artwork(Base):
    """Artwork entity — image plus title/description."""
    __tablename__ = "artworks"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    exhibition_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("exhibitions.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    order_index: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    aspect_ratio: Mapped[float] = mapped_column(
        Float, nullable=False, default=1.0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )

    exhibition: Mapped["Exhibition"] = relationship(
        "Exhibition", back_populates="artworks",
    )
