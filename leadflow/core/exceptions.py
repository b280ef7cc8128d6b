"""Custom exception classes for Leadflow."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class LeadflowError(Exception):
    """Base exception for Leadflow."""

    http_status: int = 500
    title: str = "Internal Server Error"

    def __init__(
        self, message: str, recoverable: bool = True, details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize Leadflow error.

        Args:
            message: Error message
            recoverable: Whether the error is recoverable with retry
            details: Additional error details
        """
        self.message = message
        self.recoverable = recoverable
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    @property
    def error_type_uri(self) -> str:
        """RFC 7807 problem type URI derived from the class name."""
        name = self.__class__.__name__
        slug = "".join(f"-{c.lower()}" if c.isupper() else c for c in name).lstrip("-")
        return f"urn:leadflow:error:{slug}"

    def _get_http_status(self) -> int:
        """HTTP status code used when this error escapes a request handler."""
        return self.http_status

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": self.details,
            "timestamp": self.timestamp,
        }


# Validation Errors
class ValidationError(LeadflowError):
    """Input validation error."""

    http_status = 400
    title = "Bad Request"

    def __init__(self, message: str = "Validation error", field: Optional[str] = None):
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
        """
        self.field = field
        super().__init__(message, recoverable=False, details={"field": field} if field else {})


# Authentication Errors
class AuthenticationError(LeadflowError):
    """Authentication failed."""

    http_status = 401
    title = "Unauthorized"

    def __init__(
        self,
        message: str = "Authentication failed",
        recoverable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable, details)


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password; both produce the same message."""

    http_status = 400
    title = "Bad Request"

    def __init__(self):
        super().__init__("Invalid Credentials")


class NoPendingOTPError(AuthenticationError):
    """No OTP has been issued (or it was already consumed) for this user."""

    http_status = 400
    title = "Bad Request"

    def __init__(self):
        super().__init__("No OTP request found. Please login again.")


class OTPInvalidError(AuthenticationError):
    """Submitted OTP does not match the stored one."""

    http_status = 400
    title = "Bad Request"

    def __init__(self, message: str = "Invalid OTP"):
        super().__init__(message, recoverable=True)


class OTPExpiredError(AuthenticationError):
    """Submitted OTP matched but its expiry has passed."""

    http_status = 400
    title = "Bad Request"

    def __init__(self):
        super().__init__("OTP has expired")


class InvalidTokenError(AuthenticationError):
    """Session token is missing, malformed, expired or signed with another key."""

    def __init__(self, message: str = "Token is not valid"):
        super().__init__(message)


class InsufficientPermissionsError(AuthenticationError):
    """Raised when user lacks required permissions."""

    http_status = 403
    title = "Forbidden"

    def __init__(self, required_permission: str):
        super().__init__(
            "Access denied. Admins only.",
            details={"required_permission": required_permission},
        )


# Database Errors
class DatabaseError(LeadflowError):
    """Base class for database-related errors."""

    def __init__(
        self,
        message: str = "Database error occurred",
        recoverable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable, details)


class DatabaseNotConnectedError(DatabaseError):
    """Raised when operation attempted without connection."""

    def __init__(self):
        super().__init__(
            "Database connection is not established. Call connect() first.", recoverable=False
        )


class DatabasePoolTimeoutError(DatabaseError):
    """Raised when database connection pool is exhausted and timeout occurs."""

    def __init__(self, timeout: float, pool_size: int):
        super().__init__(
            f"Database connection pool exhausted after {timeout}s (pool size: {pool_size}). "
            "Consider increasing DB_POOL_SIZE.",
            recoverable=True,
            details={"timeout": timeout, "pool_size": pool_size},
        )


# Email Delivery Errors
class EmailTransportError(LeadflowError):
    """A single email transport failed to deliver a message."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"[{provider}] {message}", recoverable=True, details={"provider": provider})


class DeliveryError(LeadflowError):
    """Every configured email transport was exhausted for one message."""

    def __init__(
        self,
        message: str = "All email delivery methods failed",
        attempts: Optional[List[str]] = None,
    ):
        self.attempts = attempts or []
        super().__init__(message, recoverable=True, details={"attempts": self.attempts})
