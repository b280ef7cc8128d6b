"""OTP-related constants."""

from typing import Final


class OTP:
    """Admin login OTP configuration."""

    LENGTH: Final[int] = 6
    TIMEOUT_SECONDS: Final[int] = 300
    DIGITS: Final[str] = "0123456789"
