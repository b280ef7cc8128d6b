"""JWT session token creation and verification."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, cast

import jwt
from jwt.exceptions import InvalidTokenError as JWTError
from loguru import logger

from leadflow.core.config.settings import get_settings
from leadflow.core.exceptions import InvalidTokenError

# Admin sessions are valid for a fixed 12 hours
SESSION_TOKEN_HOURS = 12

SUPPORTED_JWT_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


def _get_signing_params() -> tuple:
    """Return (secret_key, algorithm) from settings."""
    settings = get_settings()
    algorithm = settings.jwt_algorithm
    if algorithm not in SUPPORTED_JWT_ALGORITHMS:
        raise ValueError(
            f"Unsupported JWT algorithm: {algorithm}. "
            f"Supported algorithms: {', '.join(sorted(SUPPORTED_JWT_ALGORITHMS))}"
        )
    secret_key = settings.api_secret_key.get_secret_value() if settings.api_secret_key else ""
    return secret_key, algorithm


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Claims to encode in the token
        expires_delta: Optional custom expiration time (default 12 hours)
        now: Issue time (defaults to current UTC time)

    Returns:
        Encoded JWT token
    """
    secret_key, algorithm = _get_signing_params()

    to_encode = data.copy()
    iat = now or datetime.now(timezone.utc)
    expire = iat + (expires_delta or timedelta(hours=SESSION_TOKEN_HOURS))

    to_encode.update({"exp": expire, "iat": iat, "jti": str(uuid.uuid4()), "type": "access"})

    return str(jwt.encode(to_encode, secret_key, algorithm=algorithm))


def verify_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a JWT token.

    Args:
        token: JWT token to verify

    Returns:
        Decoded token payload

    Raises:
        InvalidTokenError: If token is malformed, expired or wrongly signed
    """
    secret_key, algorithm = _get_signing_params()
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as e:
        logger.debug(f"Token verification failed: {e}")
        raise InvalidTokenError() from e

    if payload.get("type") != "access" or "sub" not in payload:
        raise InvalidTokenError()
    return cast(Dict[str, Any], payload)
