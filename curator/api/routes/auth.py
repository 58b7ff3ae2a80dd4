"""Auth Routes — email existence check, verification resend and account deletion.

Invariants:
    - check-email: 5 requests/min per client IP, fails open ({exists: false}) when
      service credentials are missing or the provider errors
    - resend-verification: 3 requests/min per client IP, 500 on provider error
    - Rate limits are checked before the body is validated

Design Decisions:
    - Module-level limiters (single-process uvicorn; lost on restart, acceptable)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from curator.api.dependencies import (
    get_auth_provider,
    get_current_user,
    rate_limited,
)
from curator.config import get_settings
from curator.core.errors import AuthProviderError
from curator.core.rate_limit import FixedWindowRateLimiter
from curator.infrastructure.auth_provider import AuthProviderClient, AuthUser
from curator.schemas.auth import EmailCheckResponse, EmailRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

_settings = get_settings()
check_email_limiter = FixedWindowRateLimiter(_settings.check_email_rate_limit)
resend_limiter = FixedWindowRateLimiter(_settings.resend_verification_rate_limit)


@router.post(
    "/check-email",
    response_model=EmailCheckResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(rate_limited(check_email_limiter))],
)
async def check_email(
    body: EmailRequest,
    auth: AuthProviderClient = Depends(get_auth_provider),
):
    if not auth.has_service_credentials:
        logger.warning("check-email called without service credentials")
        return EmailCheckResponse(exists=False)
    try:
        user = await auth.find_user_by_email(body.email)
    except AuthProviderError as e:
        logger.error("check-email lookup failed: %s", e.message)
        return EmailCheckResponse(exists=False)
    if user is None:
        return EmailCheckResponse(exists=False)
    return EmailCheckResponse(exists=True, is_confirmed=user.is_confirmed)


@router.post(
    "/resend-verification",
    dependencies=[Depends(rate_limited(resend_limiter))],
)
async def resend_verification(
    body: EmailRequest,
    request: Request,
    auth: AuthProviderClient = Depends(get_auth_provider),
):
    origin = request.headers.get("origin") or get_settings().site_url
    try:
        await auth.resend_signup_email(
            body.email, f"{origin.rstrip('/')}/auth/callback?next=/mypage",
        )
    except AuthProviderError as e:
        logger.error("Error resending verification: %s", e.message)
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to resend verification email",
        )
    return {"success": True, "message": "Verification email sent"}


@router.delete("/account")
async def delete_account(
    user: AuthUser = Depends(get_current_user),
    auth: AuthProviderClient = Depends(get_auth_provider),
):
    """Delete the caller's account at the auth provider."""
    await auth.delete_user(user.id)
    logger.info("Account deleted", extra={"user_id": user.id})
    return {"success": True}
