"""Contact Schemas — public inquiry form and admin listing."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from curator.schemas.common import EmailField, RequiredText


class ContactCreate(BaseModel):
    name: RequiredText = Field(max_length=255)
    email: EmailField
    phone: str | None = Field(None, max_length=50)
    subject: str | None = Field(None, max_length=255)
    message: RequiredText = Field(max_length=10_000)


class ContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    phone: str | None
    subject: str | None
    message: str
    is_read: bool
    created_at: datetime
