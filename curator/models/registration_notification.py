"""RegistrationNotification ORM — admin inbox entry created by the signup webhook."""

import uuid
from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from curator.db.base import Base, utcnow


class RegistrationNotification(Base):
    __tablename__ = "registration_notifications"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    user_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_metadata: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    is_read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
