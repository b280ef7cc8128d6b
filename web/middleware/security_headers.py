"""Security headers middleware for the Leadflow API."""

from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from leadflow.core.environment import Environment


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses; HSTS only in production-like environments."""

    def __init__(self, app, strict: Optional[bool] = None):
        super().__init__(app)
        self.strict = Environment.is_production() if strict is None else strict

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin"
        # JSON-only API
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        if self.strict:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response
