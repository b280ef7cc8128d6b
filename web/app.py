"""FastAPI application for the Leadflow lead-intake API."""

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from leadflow import __version__
from leadflow.core.config import LeadflowSettings, get_settings
from leadflow.models.database import Database
from leadflow.models.db_factory import DatabaseFactory
from leadflow.repositories import (
    AdminUserRepository,
    EligibilityRecordRepository,
    LeadRepository,
)
from leadflow.services.admin_auth import AdminAuthService
from leadflow.services.chatbot import ChatResponder
from leadflow.services.intake import LeadIntakeService
from leadflow.services.notification import NotificationService
from web.exception_handlers import http_exception_handler, validation_exception_handler
from web.middleware import CorrelationMiddleware, ErrorHandlerMiddleware, SecurityHeadersMiddleware
from web.routes import admin_router, crm_router, health_router, public_router
from web.routes.admin import limiter

NOTIFICATION_DRAIN_TIMEOUT = 10.0
DATABASE_CLOSE_TIMEOUT = 10.0


def build_services(
    app: FastAPI,
    db: Database,
    settings: LeadflowSettings,
    notification_service: Optional[NotificationService] = None,
) -> None:
    """
    Wire repositories and services onto ``app.state``.

    Args:
        app: FastAPI application
        db: Connected database
        settings: Application settings
        notification_service: Prebuilt notification service (built from settings when None)
    """
    notifier = notification_service or NotificationService.from_settings(settings)
    admin_repository = AdminUserRepository(db)
    lead_repository = LeadRepository(db)
    eligibility_repository = EligibilityRecordRepository(db)

    app.state.db = db
    app.state.admin_repository = admin_repository
    app.state.lead_repository = lead_repository
    app.state.eligibility_repository = eligibility_repository
    app.state.notification_service = notifier
    app.state.intake_service = LeadIntakeService(lead_repository, eligibility_repository, notifier)
    app.state.admin_auth_service = AdminAuthService(admin_repository, notifier)
    app.state.chat_responder = ChatResponder()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup and shutdown.

    Handles:
    - Database connection and service wiring on startup
    - Email transport verification in the background
    - Draining queued emails, then closing the database on shutdown
    """
    settings: LeadflowSettings = app.state.settings
    logger.info("Leadflow API starting up...")
    try:
        db = await DatabaseFactory.connect(settings)
    except Exception as e:
        logger.error(f"Failed to connect database during startup: {e}")
        raise

    build_services(app, db, settings)
    readiness = await app.state.notification_service.selector.initialize(wait=False)
    logger.info(f"Email transports configured: {readiness}")

    yield

    logger.info("Leadflow API shutting down...")

    try:
        await app.state.notification_service.close(timeout=NOTIFICATION_DRAIN_TIMEOUT)
        logger.info("Notification service closed")
    except Exception as e:
        logger.error(f"Error closing notification service: {e}")

    try:
        await asyncio.wait_for(DatabaseFactory.close_instance(), timeout=DATABASE_CLOSE_TIMEOUT)
        logger.info("Database closed")
    except asyncio.TimeoutError:
        logger.error(f"Database close timed out after {DATABASE_CLOSE_TIMEOUT:.0f}s")
    except Exception as e:
        logger.error(f"Error closing database: {e}")


def create_app(settings: Optional[LeadflowSettings] = None) -> FastAPI:
    """
    Factory function to create FastAPI application instance.

    Args:
        settings: Application settings (defaults to the process-wide settings)

    Returns:
        Configured FastAPI application instance

    Raises:
        RuntimeError: If no valid CORS origin remains in production
    """
    settings = settings or get_settings()
    show_docs = not settings.is_production()

    app = FastAPI(
        title="Leadflow API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
        openapi_url="/openapi.json" if show_docs else None,
        description=(
            "Lead intake, loan eligibility and admin OTP login for JV Overseas. "
            "Admin endpoints take `Authorization: Bearer <token>` or `x-auth-token`."
        ),
        openapi_tags=[
            {"name": "public", "description": "Enquiries, eligibility checks and chat"},
            {"name": "admin", "description": "OTP login and lead listing"},
            {"name": "crm", "description": "CRM integration placeholder"},
            {"name": "health", "description": "Service health"},
        ],
    )
    app.state.settings = settings

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Configure middleware (last added runs first)
    # 1. Error handling middleware innermost (catches all route errors)
    app.add_middleware(ErrorHandlerMiddleware)

    # 2. Security headers middleware
    app.add_middleware(SecurityHeadersMiddleware, strict=settings.is_production())

    # 3. Correlation ID middleware for request tracking
    app.add_middleware(CorrelationMiddleware)

    # 4. Configure CORS
    allowed_origins = settings.get_cors_origins()
    if not allowed_origins and settings.is_production():
        raise RuntimeError(
            "CRITICAL: No valid CORS origins configured for production. "
            "Set CORS_ALLOWED_ORIGINS in .env (e.g., 'https://yourdomain.com')."
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Content-Type",
            "Authorization",
            "X-Requested-With",
            "X-Request-ID",
            "x-auth-token",
        ],
        expose_headers=["X-Request-ID"],
        max_age=3600,
    )

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.include_router(health_router)
    app.include_router(public_router)
    app.include_router(admin_router)
    app.include_router(crm_router)

    return app


# Create module-level app for `uvicorn web.app:app`
app = create_app()
