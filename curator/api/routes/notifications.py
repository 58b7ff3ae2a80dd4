"""Notification Routes — signup webhook, admin inbox and member stats.

Invariants:
    - Webhook: signature checked against the raw body before JSON parsing
      (401 on mismatch when a secret is configured), 400 without a user object
    - Everything else requires an admin caller
"""

import json
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from curator.api.dependencies import require_admin
from curator.config import get_settings
from curator.core.errors import AuthenticationRequiredError
from curator.infrastructure.database import get_db
from curator.schemas.notification import MemberStats, NotificationResponse
from curator.services import exhibition_service, inbox_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["notifications"])


@router.post("/webhooks/user-signup")
async def user_signup_webhook(
    request: Request,
    x_webhook_signature: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
):
    raw = await request.body()
    if not inbox_service.valid_signature(
        get_settings().webhook_secret, raw, x_webhook_signature,
    ):
        logger.warning("Signup webhook rejected: bad signature")
        raise AuthenticationRequiredError()

    try:
        payload = json.loads(raw or b"{}")
    except ValueError:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Invalid JSON body")
    user = payload.get("user") if isinstance(payload, dict) else None
    if not isinstance(user, dict):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="No user data")

    await inbox_service.record_signup(db, user)
    return {"success": True}


@router.get(
    "/notifications",
    response_model=list[NotificationResponse],
    dependencies=[Depends(require_admin)],
)
async def list_notifications(db: AsyncSession = Depends(get_db)):
    return await inbox_service.list_notifications(db)


@router.post("/notifications/read-all", dependencies=[Depends(require_admin)])
async def mark_all_read(db: AsyncSession = Depends(get_db)):
    updated = await inbox_service.mark_all_notifications_read(db)
    return {"success": True, "updated": updated}


@router.post(
    "/notifications/{notification_id}/read",
    response_model=NotificationResponse,
    dependencies=[Depends(require_admin)],
)
async def mark_read(notification_id: UUID, db: AsyncSession = Depends(get_db)):
    return await inbox_service.mark_notification_read(db, notification_id)


@router.get(
    "/members/{user_id}/stats",
    response_model=MemberStats,
    dependencies=[Depends(require_admin)],
)
async def member_stats(user_id: str, db: AsyncSession = Depends(get_db)):
    return await exhibition_service.member_stats(db, user_id)
