"""Password hashing for admin credentials."""

# Bcrypt has a maximum password length of 72 bytes
MAX_PASSWORD_BYTES = 72

# passlib 1.7.4's detect_wrap_bug hashes a 200-char probe, which bcrypt >= 4.1
# rejects outright. Truncate at the backend so the probe and long inputs both work.
import passlib.handlers.bcrypt as _pbcrypt  # noqa: E402

_original_calc_checksum = _pbcrypt._BcryptBackend._calc_checksum


def _patched_calc_checksum(self, secret):
    """Truncate secrets to 72 bytes before handing them to bcrypt."""
    if isinstance(secret, bytes) and len(secret) > MAX_PASSWORD_BYTES:
        secret = secret[:MAX_PASSWORD_BYTES]
    return _original_calc_checksum(self, secret)


_pbcrypt._BcryptBackend._calc_checksum = _patched_calc_checksum

from passlib.context import CryptContext  # noqa: E402

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _truncate_password(password: str) -> str:
    """
    Truncate password to 72 bytes for bcrypt, handling UTF-8 safely.

    Args:
        password: Plain text password

    Returns:
        Truncated password (max 72 bytes when encoded as UTF-8)
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) <= MAX_PASSWORD_BYTES:
        return password
    # Step back until the cut lands on a character boundary
    truncated = password_bytes[:MAX_PASSWORD_BYTES]
    for i in range(len(truncated), 0, -1):
        try:
            return truncated[:i].decode("utf-8")
        except UnicodeDecodeError:
            continue
    return ""


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Salted bcrypt hash
    """
    return str(pwd_context.hash(_truncate_password(password)))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Malformed or empty hashes count as a mismatch.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password

    Returns:
        True if password matches
    """
    if not hashed_password:
        return False
    try:
        return bool(pwd_context.verify(_truncate_password(plain_password), hashed_password))
    except ValueError:
        return False
