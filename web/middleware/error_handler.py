"""Global error handling middleware for the Leadflow API."""

from typing import Any, Callable, Dict, Optional, cast

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from leadflow.core.environment import Environment
from leadflow.core.exceptions import (
    AuthenticationError,
    DatabaseError,
    LeadflowError,
    ValidationError,
)

GENERIC_SERVER_ERROR = "An unexpected error occurred. Please try again later."


def _problem(
    request: Request,
    status_code: int,
    type_uri: str,
    title: str,
    detail: str,
    headers: Optional[Dict[str, str]] = None,
    **extensions: Any,
) -> JSONResponse:
    # ``msg`` mirrors ``detail`` for clients that read the short error field
    content: Dict[str, Any] = {
        "type": type_uri,
        "title": title,
        "status": status_code,
        "detail": detail,
        "instance": request.url.path,
        "msg": detail,
    }
    content.update(extensions)
    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers,
        media_type="application/problem+json",
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware with consistent JSON responses.

    Catches all unhandled exceptions and returns RFC 7807 problem documents.
    Internal error text reaches the client only in development.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request and handle any exceptions.

        Args:
            request: FastAPI request
            call_next: Next middleware/handler in chain

        Returns:
            Response object
        """
        try:
            response = await call_next(request)
            return cast(Response, response)
        except ValidationError as e:
            return self._handle_validation_error(e, request)
        except AuthenticationError as e:
            return self._handle_auth_error(e, request)
        except DatabaseError as e:
            return self._handle_database_error(e, request)
        except LeadflowError as e:
            return self._handle_leadflow_error(e, request)
        except Exception as e:
            return self._handle_unexpected_error(e, request)

    def _handle_validation_error(self, error: ValidationError, request: Request) -> JSONResponse:
        logger.warning(f"Validation error on {request.url.path}: {error.message}")
        extensions: Dict[str, Any] = {}
        if error.field:
            extensions["field"] = error.field
            extensions["errors"] = {error.field: error.message}
        return _problem(
            request,
            status.HTTP_400_BAD_REQUEST,
            error.error_type_uri,
            error.title,
            error.message,
            **extensions,
        )

    def _handle_auth_error(self, error: AuthenticationError, request: Request) -> JSONResponse:
        status_code = error._get_http_status()
        logger.warning(f"Authentication error on {request.url.path}: {error.message}")
        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        return _problem(
            request, status_code, error.error_type_uri, error.title, error.message, headers
        )

    def _handle_database_error(self, error: DatabaseError, request: Request) -> JSONResponse:
        logger.error(f"Database error on {request.url.path}: {error.message} {error.details}")
        detail = error.message if Environment.is_development() else GENERIC_SERVER_ERROR
        return _problem(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            error.error_type_uri,
            error.title,
            detail,
            recoverable=error.recoverable,
        )

    def _handle_leadflow_error(self, error: LeadflowError, request: Request) -> JSONResponse:
        status_code = error._get_http_status()
        logger.error(
            f"Leadflow error on {request.url.path}: {error.__class__.__name__}: "
            f"{error.message} (recoverable={error.recoverable})"
        )
        if status_code >= 500 and not Environment.is_development():
            detail = GENERIC_SERVER_ERROR
        else:
            detail = error.message
        return _problem(
            request,
            status_code,
            error.error_type_uri,
            error.title,
            detail,
            recoverable=error.recoverable,
        )

    def _handle_unexpected_error(self, error: Exception, request: Request) -> JSONResponse:
        logger.opt(exception=error).error(f"Unexpected error on {request.url.path}: {error}")
        detail = str(error) if Environment.is_development() else GENERIC_SERVER_ERROR
        return _problem(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "urn:leadflow:error:internal-server",
            "Internal Server Error",
            detail,
        )
