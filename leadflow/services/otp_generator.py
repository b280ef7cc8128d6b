"""One-time password generation."""

import secrets

from leadflow.constants.otp import OTP


def generate_otp(length: int = OTP.LENGTH) -> str:
    """
    Generate a numeric one-time password.

    Each digit is drawn independently from a cryptographically secure source.

    Args:
        length: Number of digits

    Returns:
        Digit string of the requested length

    Raises:
        ValueError: If length is not positive
    """
    if length <= 0:
        raise ValueError("OTP length must be positive")
    return "".join(secrets.choice(OTP.DIGITS) for _ in range(length))
