"""Inbox Service — contact inquiries and signup notifications read by admins.

Invariants:
    - Both inboxes list newest first
    - Unknown ids are 404 for every admin mutation
    - Signup webhook signature: hex HMAC-SHA256 of the raw body, compared in
      constant time; no secret configured means no check
"""

import hashlib
import hmac
import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from curator.core.errors import ResourceNotFoundError
from curator.models.contact_inquiry import ContactInquiry
from curator.models.registration_notification import RegistrationNotification
from curator.schemas.contact import ContactCreate

logger = logging.getLogger(__name__)


# ─── Contact inquiries ───────────────────────────────────────────

async def submit_inquiry(db: AsyncSession, body: ContactCreate) -> ContactInquiry:
    inquiry = ContactInquiry(
        name=body.name,
        email=body.email,
        phone=body.phone or None,
        subject=body.subject or None,
        message=body.message,
        is_read=False,
    )
    db.add(inquiry)
    await db.commit()
    logger.info("Contact inquiry received")
    return inquiry


async def list_inquiries(db: AsyncSession) -> list[ContactInquiry]:
    result = await db.execute(
        select(ContactInquiry).order_by(ContactInquiry.created_at.desc()),
    )
    return list(result.scalars().all())


async def _get_inquiry(db: AsyncSession, inquiry_id: UUID) -> ContactInquiry:
    inquiry = await db.get(ContactInquiry, inquiry_id)
    if inquiry is None:
        raise ResourceNotFoundError("ContactInquiry", str(inquiry_id))
    return inquiry


async def mark_inquiry_read(db: AsyncSession, inquiry_id: UUID) -> ContactInquiry:
    inquiry = await _get_inquiry(db, inquiry_id)
    inquiry.is_read = True
    await db.commit()
    await db.refresh(inquiry)
    return inquiry


async def delete_inquiry(db: AsyncSession, inquiry_id: UUID) -> None:
    inquiry = await _get_inquiry(db, inquiry_id)
    await db.delete(inquiry)
    await db.commit()


# ─── Signup notifications ────────────────────────────────────────

def valid_signature(secret: str, body: bytes, signature: str | None) -> bool:
    """True when no secret is configured or the hex HMAC-SHA256 matches."""
    if not secret:
        return True
    if not signature:
        return False
    expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature.strip().lower())


async def record_signup(db: AsyncSession, user: dict) -> RegistrationNotification:
    notification = RegistrationNotification(
        user_id=str(user.get("id") or ""),
        user_email=user.get("email"),
        user_metadata=user.get("user_metadata") or {},
        is_read=False,
    )
    db.add(notification)
    await db.commit()
    logger.info(
        "Registration notification created",
        extra={"user_id": notification.user_id},
    )
    return notification


async def list_notifications(db: AsyncSession) -> list[RegistrationNotification]:
    result = await db.execute(
        select(RegistrationNotification)
        .order_by(RegistrationNotification.created_at.desc()),
    )
    return list(result.scalars().all())


async def mark_notification_read(
    db: AsyncSession, notification_id: UUID,
) -> RegistrationNotification:
    notification = await db.get(RegistrationNotification, notification_id)
    if notification is None:
        raise ResourceNotFoundError("Notification", str(notification_id))
    notification.is_read = True
    await db.commit()
    await db.refresh(notification)
    return notification


async def mark_all_notifications_read(db: AsyncSession) -> int:
    result = await db.execute(
        update(RegistrationNotification)
        .where(RegistrationNotification.is_read.is_(False))
        .values(is_read=True)
        .execution_options(synchronize_session=False),
    )
    await db.commit()
    return result.rowcount or 0
