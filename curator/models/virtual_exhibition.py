"""VirtualExhibition ORM — a published 2.5D/3D gallery configuration."""

import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from curator.db.base import Base, utcnow


class VirtualExhibition(Base):
    __tablename__ = "virtual_exhibitions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    exhibition_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("exhibitions.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    template_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default="2.5d_fixed",
    )
    settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )

    exhibition: Mapped["Exhibition"] = relationship(
        "Exhibition", back_populates="virtual_exhibitions",
    )
