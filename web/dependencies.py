"""Dependency providers for the Leadflow API.

Services are built once in the application lifespan and stored on
``app.state``; the providers below hand them to route handlers. Tests
replace them through ``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request
from loguru import logger

from leadflow.core.auth import verify_token
from leadflow.core.enums import AdminRole
from leadflow.core.exceptions import InsufficientPermissionsError
from leadflow.repositories import AdminUser, AdminUserRepository, LeadRepository
from leadflow.services.admin_auth import AdminAuthService
from leadflow.services.chatbot import ChatResponder
from leadflow.services.intake import LeadIntakeService

LEGACY_TOKEN_HEADER = "x-auth-token"


def extract_raw_token(request: Request) -> Optional[str]:
    """
    Extract the raw session token from the request headers.

    ``Authorization: Bearer <token>`` is preferred; the legacy
    ``x-auth-token`` header is accepted as well.

    Args:
        request: FastAPI request object

    Returns:
        Raw token string, or None if not found
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.split(" ", 1)[1].strip()
        if token:
            return token
    return request.headers.get(LEGACY_TOKEN_HEADER) or None


def get_admin_repository(request: Request) -> AdminUserRepository:
    return request.app.state.admin_repository


def get_lead_repository(request: Request) -> LeadRepository:
    return request.app.state.lead_repository


def get_intake_service(request: Request) -> LeadIntakeService:
    return request.app.state.intake_service


def get_admin_auth_service(request: Request) -> AdminAuthService:
    return request.app.state.admin_auth_service


def get_chat_responder(request: Request) -> ChatResponder:
    return request.app.state.chat_responder


async def require_admin(
    request: Request,
    admins: AdminUserRepository = Depends(get_admin_repository),
) -> AdminUser:
    """
    Authenticate the caller as a SUPER_ADMIN.

    The role is re-read from the store on every request, so a demoted or
    deleted admin loses access before the token expires.

    Args:
        request: FastAPI request object
        admins: Admin user repository

    Returns:
        Authenticated admin user

    Raises:
        HTTPException: 401 if the token is missing or the user no longer exists
        InvalidTokenError: If the token is invalid or expired
        InsufficientPermissionsError: If the user is not a SUPER_ADMIN
    """
    token = extract_raw_token(request)
    if not token:
        raise HTTPException(
            status_code=401,
            detail="No token, authorization denied",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(token)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=401,
            detail="Token is not valid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await admins.get_by_id(user_id)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if user.role != AdminRole.SUPER_ADMIN.value:
        logger.warning(f"Access denied. Admin {user.id} tried to access admin route.")
        raise InsufficientPermissionsError(AdminRole.SUPER_ADMIN.value)

    return user
