"""Two-step admin login: password check, emailed OTP, signed session token."""

import hmac
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Tuple

from loguru import logger

from leadflow.constants.otp import OTP
from leadflow.core.auth.jwt_tokens import SESSION_TOKEN_HOURS, create_access_token
from leadflow.core.auth.password import hash_password, verify_password
from leadflow.core.enums import AdminRole
from leadflow.core.environment import Environment
from leadflow.core.exceptions import (
    InvalidCredentialsError,
    NoPendingOTPError,
    OTPExpiredError,
    OTPInvalidError,
    ValidationError,
)
from leadflow.repositories.admin_user_repository import AdminUserRepository
from leadflow.services.otp_generator import generate_otp
from leadflow.utils.masking import mask_email

if TYPE_CHECKING:
    from leadflow.services.notification.service import NotificationService


class AuthState(str, Enum):
    """
    Admin login states.

    ANONYMOUS -> OTP_PENDING after a correct password, OTP_PENDING ->
    AUTHENTICATED after a matching unexpired OTP. Every failed guard leaves
    the stored state untouched.
    """

    ANONYMOUS = "anonymous"
    OTP_PENDING = "otp_pending"
    AUTHENTICATED = "authenticated"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AdminAuthService:
    """Credential and OTP verifier for admin users."""

    def __init__(
        self,
        admin_repository: AdminUserRepository,
        notifier: Optional["NotificationService"] = None,
        clock: Callable[[], datetime] = _utcnow,
        otp_factory: Callable[[], str] = generate_otp,
        otp_ttl: timedelta = timedelta(seconds=OTP.TIMEOUT_SECONDS),
    ):
        """
        Initialize admin auth service.

        Args:
            admin_repository: Store for admin users and their pending OTP
            notifier: Notification service used to email the OTP
            clock: Returns the current timezone-aware time
            otp_factory: Produces a fresh OTP
            otp_ttl: OTP validity window
        """
        self._admins = admin_repository
        self._notifier = notifier
        self._clock = clock
        self._otp_factory = otp_factory
        self._otp_ttl = otp_ttl

    async def login(self, email: str, password: str) -> AuthState:
        """
        Check credentials and issue an OTP.

        A second login before verification overwrites the pending OTP.

        Args:
            email: Admin email
            password: Plain text password

        Returns:
            AuthState.OTP_PENDING

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        user = await self._admins.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Admin login rejected for {mask_email(email)}")
            raise InvalidCredentialsError()

        otp = self._otp_factory()
        expiry = self._clock() + self._otp_ttl
        await self._admins.set_otp(user.id, otp, expiry)

        if self._notifier is not None:
            self._notifier.notify_admin_otp(user.email, otp)

        if not Environment.is_production():
            logger.info(f"DEV LOG: OTP for {user.email} is {otp}")
        logger.info(f"OTP issued for admin {mask_email(user.email)}")
        return AuthState.OTP_PENDING

    async def verify_otp(self, email: str, code: str) -> str:
        """
        Verify a pending OTP and issue a session token.

        Args:
            email: Admin email
            code: Submitted OTP

        Returns:
            Signed session token carrying the admin id and role

        Raises:
            InvalidCredentialsError: Unknown email
            NoPendingOTPError: No OTP stored for this admin
            OTPInvalidError: Code does not match
            OTPExpiredError: Code matched after its expiry
        """
        user = await self._admins.get_by_email(email)
        if user is None:
            raise InvalidCredentialsError()

        if not user.has_pending_otp:
            raise NoPendingOTPError()

        assert user.otp is not None and user.otp_expiry is not None
        if not hmac.compare_digest(user.otp.encode(), str(code).encode()):
            logger.warning(f"Invalid OTP submitted for admin {mask_email(user.email)}")
            raise OTPInvalidError()

        if self._clock() > user.otp_expiry:
            raise OTPExpiredError()

        await self._admins.clear_otp(user.id)

        token = create_access_token(
            {"sub": str(user.id), "role": user.role},
            expires_delta=timedelta(hours=SESSION_TOKEN_HOURS),
        )
        logger.info(f"Admin {mask_email(user.email)} authenticated")
        return token


async def provision_super_admin(
    admin_repository: AdminUserRepository, email: str, password: str
) -> Tuple[int, bool]:
    """
    Create the SUPER_ADMIN account unless it already exists.

    Args:
        admin_repository: Store for admin users
        email: Admin email
        password: Plain text password (stored as a bcrypt hash)

    Returns:
        (admin id, created) where created is False for an existing account

    Raises:
        ValidationError: If email or password is empty
    """
    if not email or not password:
        raise ValidationError("Admin email and password are required", field="email")

    existing = await admin_repository.get_by_email(email)
    if existing is not None:
        logger.info(f"Admin user already exists: {mask_email(email)}")
        return existing.id, False

    admin_id = await admin_repository.create(
        {
            "email": email,
            "password_hash": hash_password(password),
            "role": AdminRole.SUPER_ADMIN.value,
        }
    )
    return admin_id, True
