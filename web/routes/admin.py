"""Admin routes: OTP login and lead listing."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from leadflow.core.config import get_settings
from leadflow.repositories import LeadRepository
from leadflow.services.admin_auth import AdminAuthService
from web.dependencies import get_admin_auth_service, get_lead_repository, require_admin
from web.models import AdminLoginRequest, MessageResponse, TokenResponse, VerifyOTPRequest

router = APIRouter(prefix="/api/admin", tags=["admin"])
limiter = Limiter(key_func=get_remote_address)

OTP_SENT_MESSAGE = "OTP sent to registered email"


def _admin_auth_rate_limit() -> str:
    return get_settings().admin_login_rate_limit


@router.post("/login", response_model=MessageResponse)
@limiter.limit(_admin_auth_rate_limit)
async def login(
    request: Request,
    credentials: AdminLoginRequest,
    auth: AdminAuthService = Depends(get_admin_auth_service),
) -> MessageResponse:
    """
    Check admin credentials and email a one-time code.

    Args:
        request: FastAPI request object (required for rate limiter)
        credentials: Admin email and password
        auth: Admin auth service

    Returns:
        Acknowledgement; the code itself is only sent by email

    Raises:
        InvalidCredentialsError: Same response for unknown email and wrong password
    """
    await auth.login(credentials.email, credentials.password)
    return MessageResponse(msg=OTP_SENT_MESSAGE)


@router.post("/verify-otp", response_model=TokenResponse)
@limiter.limit(_admin_auth_rate_limit)
async def verify_otp(
    request: Request,
    body: VerifyOTPRequest,
    auth: AdminAuthService = Depends(get_admin_auth_service),
) -> TokenResponse:
    """
    Exchange a pending OTP for a 12-hour session token.

    Args:
        request: FastAPI request object (required for rate limiter)
        body: Admin email and OTP
        auth: Admin auth service

    Returns:
        Signed session token
    """
    token = await auth.verify_otp(body.email, body.otp)
    return TokenResponse(token=token)


@router.get("/leads", dependencies=[Depends(require_admin)])
async def list_leads(
    university: Optional[str] = Query(default=None),
    preferred_country: Optional[str] = Query(default=None, alias="preferredCountry"),
    limit: int = Query(default=500, ge=1, le=5000),
    leads: LeadRepository = Depends(get_lead_repository),
) -> List[Dict[str, Any]]:
    """
    List leads, newest first.

    Args:
        university: Only leads interested in this university
        preferred_country: Only leads preferring this country
        limit: Maximum number of leads returned
    """
    rows = await leads.get_all(
        limit=limit, university=university, preferred_country=preferred_country
    )
    return [lead.to_dict() for lead in rows]
