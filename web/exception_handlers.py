"""RFC 7807 Problem Details exception handlers for FastAPI."""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

_ERROR_TYPES = {
    400: "urn:leadflow:error:bad-request",
    401: "urn:leadflow:error:unauthorized",
    403: "urn:leadflow:error:forbidden",
    404: "urn:leadflow:error:not-found",
    405: "urn:leadflow:error:method-not-allowed",
    409: "urn:leadflow:error:conflict",
    429: "urn:leadflow:error:rate-limit",
    500: "urn:leadflow:error:internal-server",
    501: "urn:leadflow:error:not-implemented",
    503: "urn:leadflow:error:service-unavailable",
}

_ERROR_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    429: "Too Many Requests",
    500: "Internal Server Error",
    501: "Not Implemented",
    503: "Service Unavailable",
}


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Convert FastAPI HTTPException to RFC 7807 Problem Details format."""
    status_code = exc.status_code
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)

    content = {
        "type": _ERROR_TYPES.get(status_code, f"urn:leadflow:error:http-{status_code}"),
        "title": _ERROR_TITLES.get(status_code, "Error"),
        "status": status_code,
        "detail": detail,
        "instance": request.url.path,
        "msg": detail,
    }

    headers = getattr(exc, "headers", None) or {}

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers,
        media_type="application/problem+json",
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert request validation errors to a 400 problem with itemized field errors."""
    errors = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body") or "body"
        errors[field] = error["msg"]

    return JSONResponse(
        status_code=400,
        content={
            "type": "urn:leadflow:error:validation",
            "title": "Validation Error",
            "status": 400,
            "detail": "Request validation failed",
            "instance": request.url.path,
            "errors": errors,
        },
        media_type="application/problem+json",
    )
