"""Exhibition ORM — aggregate root for one user's curation project.

Invariants:
    - id is UUID primary key (client-side default)
    - user_id is the auth provider's opaque user id (no local users table)
    - status in draft | in_progress | complete
    - curator_conversation entries are {role, content, timestamp, step}
    - JSON columns are replaced, never mutated in place (no MutableList tracking)

Design Decisions:
    - JSON columns for keywords/conversation/posters: read and written whole
      (ADR: no per-item queries exist)
    - Exhibition metadata as nullable free-text strings: dates are shown as typed
    - cascade delete for artworks, content blocks and virtual exhibitions
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, Integer, Boolean, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from curator.db.base import Base, utcnow


class Exhibition(Base):
    """Exhibition aggregate root — owns artworks and generated content."""
    __tablename__ = "exhibitions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True,
    )
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    keywords: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft",
    )
    is_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    public_slug: Mapped[str | None] = mapped_column(
        String(255), nullable=True, unique=True,
    )
    view_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )

    # Metadata shown on posters and press releases
    artist_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    venue: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    exhibition_date: Mapped[str | None] = mapped_column(String(64), nullable=True)
    exhibition_end_date: Mapped[str | None] = mapped_column(String(64), nullable=True)
    opening_hours: Mapped[str | None] = mapped_column(String(255), nullable=True)
    admission_fee: Mapped[str | None] = mapped_column(String(255), nullable=True)

    curator_conversation: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    posters: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
        onupdate=utcnow,
    )

    # Relationships
    artworks: Mapped[list["Artwork"]] = relationship(
        "Artwork", back_populates="exhibition",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Artwork.order_index",
    )
    contents: Mapped[list["ExhibitionContent"]] = relationship(
        "ExhibitionContent", back_populates="exhibition",
        cascade="all, delete-orphan", lazy="selectin",
    )
    virtual_exhibitions: Mapped[list["VirtualExhibition"]] = relationship(
        "VirtualExhibition", back_populates="exhibition",
        cascade="all, delete-orphan", lazy="selectin",
    )

    def touch(self) -> None:
        self.updated_at = utcnow()
