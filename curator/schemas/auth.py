"""Auth Schemas — email checks and verification resend."""

from pydantic import BaseModel

from curator.schemas.common import EmailField


class EmailRequest(BaseModel):
    email: EmailField


class EmailCheckResponse(BaseModel):
    exists: bool
    is_confirmed: bool | None = None
