"""Notification Schemas — signup webhook inbox and member stats."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    user_email: str | None
    user_metadata: dict
    is_read: bool
    created_at: datetime


class MemberStats(BaseModel):
    total_exhibitions: int
    public_exhibitions: int
    total_views: int
