"""Admin user repository implementation."""

from datetime import datetime
from typing import Any, Dict, Optional

from loguru import logger

from leadflow.core.enums import AdminRole
from leadflow.core.exceptions import ValidationError
from leadflow.repositories.base import BaseRepository
from leadflow.repositories.entities import AdminUser
from leadflow.utils.masking import mask_email

_COLUMNS = "id, email, password, role, otp, otp_expiry, created_at"


class AdminUserRepository(BaseRepository[AdminUser]):
    """Repository for admin users and their pending OTP state."""

    table_name = "admin_users"

    def _row_to_admin(self, row: Any) -> AdminUser:
        """
        Convert database row to AdminUser entity.

        Args:
            row: Database row

        Returns:
            AdminUser entity
        """
        return AdminUser(
            id=row["id"],
            email=row["email"],
            password_hash=row["password"],
            role=row["role"],
            otp=row["otp"],
            otp_expiry=row["otp_expiry"],
            created_at=row["created_at"],
        )

    async def get_by_id(self, id: int) -> Optional[AdminUser]:
        """
        Get admin user by ID.

        Args:
            id: Admin user ID

        Returns:
            AdminUser entity or None if not found
        """
        async with self._connection() as conn:
            row = await conn.fetchrow(f"SELECT {_COLUMNS} FROM admin_users WHERE id = $1", id)
            return self._row_to_admin(row) if row else None

    async def get_by_email(self, email: str) -> Optional[AdminUser]:
        """
        Get admin user by email (case-insensitive).

        Args:
            email: Admin email

        Returns:
            AdminUser entity or None if not found
        """
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"SELECT {_COLUMNS} FROM admin_users WHERE LOWER(email) = LOWER($1)", email
            )
            return self._row_to_admin(row) if row else None

    async def create(self, data: Dict[str, Any]) -> int:
        """
        Create new admin user.

        Args:
            data: email, password_hash and optional role

        Returns:
            Created admin user ID

        Raises:
            ValidationError: If email or password hash is missing
        """
        if not data.get("email"):
            raise ValidationError("Email is required", field="email")
        if not data.get("password_hash"):
            raise ValidationError("Password hash is required", field="password")

        async with self._connection() as conn:
            admin_id = await conn.fetchval(
                """
                INSERT INTO admin_users (email, password, role)
                VALUES ($1, $2, $3)
                RETURNING id
                """,
                data["email"].strip().lower(),
                data["password_hash"],
                data.get("role", AdminRole.SUPER_ADMIN.value),
            )

        logger.info(f"Admin user created: {mask_email(data['email'])}")
        return int(admin_id)

    async def set_otp(self, user_id: int, otp: str, expiry: datetime) -> bool:
        """
        Store a pending OTP with its absolute expiry.

        Overwrites any previous pending OTP.

        Args:
            user_id: Admin user ID
            otp: OTP code
            expiry: Absolute expiry timestamp (timezone-aware)

        Returns:
            True if the user row was updated
        """
        async with self._connection() as conn:
            result = await conn.execute(
                """
                UPDATE admin_users
                SET otp = $2, otp_expiry = $3, updated_at = NOW()
                WHERE id = $1
                """,
                user_id,
                otp,
                expiry,
            )
        return result == "UPDATE 1"

    async def clear_otp(self, user_id: int) -> bool:
        """
        Clear a consumed OTP and its expiry.

        Args:
            user_id: Admin user ID

        Returns:
            True if the user row was updated
        """
        async with self._connection() as conn:
            result = await conn.execute(
                """
                UPDATE admin_users
                SET otp = NULL, otp_expiry = NULL, updated_at = NOW()
                WHERE id = $1
                """,
                user_id,
            )
        return result == "UPDATE 1"
