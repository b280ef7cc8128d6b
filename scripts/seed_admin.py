#!/usr/bin/env python3
"""Create the SUPER_ADMIN account from SUPER_ADMIN_EMAIL / SUPER_ADMIN_PASSWORD."""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger  # noqa: E402

from leadflow.core.config import get_settings  # noqa: E402
from leadflow.core.exceptions import LeadflowError  # noqa: E402
from leadflow.models.db_factory import DatabaseFactory  # noqa: E402
from leadflow.repositories import AdminUserRepository  # noqa: E402
from leadflow.services.admin_auth import provision_super_admin  # noqa: E402
from leadflow.utils.masking import mask_email  # noqa: E402


async def seed() -> int:
    """Seed the admin account; returns a process exit code."""
    settings = get_settings()
    email = settings.super_admin_email
    password = settings.super_admin_password.get_secret_value()
    if not email or not password:
        logger.error("SUPER_ADMIN_EMAIL and SUPER_ADMIN_PASSWORD must be set")
        return 1

    db = await DatabaseFactory.connect(settings)
    try:
        admin_id, created = await provision_super_admin(AdminUserRepository(db), email, password)
    except LeadflowError as e:
        logger.error(f"Admin seeding failed: {e.message}")
        return 1
    finally:
        await DatabaseFactory.close_instance()

    if created:
        logger.info(f"Admin user created with id {admin_id} and email {mask_email(email)}")
    else:
        logger.info("Admin user already exists")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(seed()))
