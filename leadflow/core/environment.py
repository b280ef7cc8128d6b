"""Environment checks shared by logging, middleware and services."""

from typing import FrozenSet

from leadflow.core.config.settings import get_settings


class Environment:
    """
    Environment name helpers.

    The name is read from ``LeadflowSettings.env``, so a value set in ``.env``
    counts the same as one exported in the process environment.
    """

    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"
    TESTING = "testing"

    # Localhost CORS origins and verbose diagnostics are allowed here only
    RELAXED: FrozenSet[str] = frozenset({DEVELOPMENT, TESTING})

    @staticmethod
    def current() -> str:
        """Validated, lowercased environment name from settings."""
        return get_settings().env

    @classmethod
    def is_relaxed(cls, env: str) -> bool:
        return env.lower() in cls.RELAXED

    @classmethod
    def is_production(cls) -> bool:
        """
        Check for a production-like environment.

        Staging counts as production here: it gets strict headers and no
        OTP values in logs.
        """
        return not cls.is_relaxed(cls.current())

    @classmethod
    def is_development(cls) -> bool:
        """
        Check for development mode.

        Only development unlocks internal error text in HTTP responses.
        """
        return cls.current() == cls.DEVELOPMENT
