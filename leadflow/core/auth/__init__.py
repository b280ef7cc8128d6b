"""Authentication primitives: password hashing and signed session tokens."""

from .jwt_tokens import (
    SESSION_TOKEN_HOURS,
    SUPPORTED_JWT_ALGORITHMS,
    create_access_token,
    verify_token,
)
from .password import MAX_PASSWORD_BYTES, hash_password, pwd_context, verify_password

__all__ = [
    # JWT tokens
    "SESSION_TOKEN_HOURS",
    "SUPPORTED_JWT_ALGORITHMS",
    "create_access_token",
    "verify_token",
    # Password
    "MAX_PASSWORD_BYTES",
    "pwd_context",
    "hash_password",
    "verify_password",
]
