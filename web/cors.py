"""Allowed CORS origins for the intake forms and the admin dashboard."""

from typing import List
from urllib.parse import urlsplit

from loguru import logger

from leadflow.core.environment import Environment

LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "0.0.0.0"})


def is_local_origin(origin: str) -> bool:
    """True for origins served from this machine (localhost, loopback, *.localhost)."""
    try:
        host = (urlsplit(origin).hostname or "").lower()
    except ValueError:
        return False
    return host in LOOPBACK_HOSTS or host.endswith(".localhost")


def validate_cors_origins(origins_str: str, env: str) -> List[str]:
    """
    Parse the comma-separated origin list for an environment.

    Development and testing keep every origin. Elsewhere the wildcard and local
    origins are dropped, and a wildcard in production is refused outright.

    Args:
        origins_str: Value of CORS_ALLOWED_ORIGINS
        env: Validated environment name

    Returns:
        Allowed origins in their configured order

    Raises:
        ValueError: If "*" is configured in production
    """
    origins = [origin.strip() for origin in origins_str.split(",") if origin.strip()]
    if Environment.is_relaxed(env):
        return origins

    if env == Environment.PRODUCTION and "*" in origins:
        raise ValueError("Wildcard CORS origin ('*') not allowed in production")

    dropped = [o for o in origins if o == "*" or is_local_origin(o)]
    if dropped:
        logger.warning(f"Dropping CORS origins not allowed in {env}: {dropped}")
    return [o for o in origins if o not in dropped]
