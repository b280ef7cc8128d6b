"""Pytest configuration and common fixtures."""

import os
import secrets
import warnings
from pathlib import Path

from dotenv import load_dotenv

# Try to load test-specific environment file if it exists
test_env_file = Path(__file__).parent / ".env.test"
if test_env_file.exists():
    load_dotenv(test_env_file)

# CRITICAL: Set environment variables BEFORE any leadflow imports
# web.app builds a module-level app at import time, which reads settings.
os.environ.setdefault("API_SECRET_KEY", secrets.token_urlsafe(48))
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "postgresql://localhost:5432/leadflow_test")

from datetime import datetime, timedelta, timezone  # noqa: E402
from typing import Any, Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402

from leadflow.core.auth import hash_password  # noqa: E402
from leadflow.core.config.settings import reset_settings  # noqa: E402
from leadflow.core.enums import AdminRole  # noqa: E402
from leadflow.core.exceptions import ValidationError  # noqa: E402
from leadflow.repositories.entities import AdminUser, EligibilityRecord, Lead  # noqa: E402


def pytest_configure(config):
    """Configure pytest environment before tests run."""
    warnings.filterwarnings("ignore", message="coroutine.*was never awaited")


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Isolate environment variables and the settings singleton per test."""
    monkeypatch.setenv("API_SECRET_KEY", secrets.token_urlsafe(48))
    monkeypatch.setenv("ENV", "testing")
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost:5432/leadflow_test")
    for name in (
        "EMAIL_PROVIDER",
        "EMAIL_USER",
        "EMAIL_PASS",
        "BREVO_SMTP_USER",
        "BREVO_SMTP_PASS",
        "BREVO_API_KEY",
        "EMAIL_BRIDGE_URL",
        "EMAIL_BRIDGE_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)

    reset_settings()
    yield
    reset_settings()


class InMemoryAdminUsers:
    """Admin user store with the AdminUserRepository interface."""

    def __init__(self) -> None:
        self.users: Dict[int, AdminUser] = {}
        self._next_id = 1

    def add(self, email: str, password: str, role: str = AdminRole.SUPER_ADMIN.value) -> AdminUser:
        user = AdminUser(
            id=self._next_id,
            email=email,
            password_hash=hash_password(password),
            role=role,
            created_at=datetime.now(timezone.utc),
        )
        self.users[user.id] = user
        self._next_id += 1
        return user

    async def get_by_id(self, id: int) -> Optional[AdminUser]:
        return self.users.get(id)

    async def get_by_email(self, email: str) -> Optional[AdminUser]:
        for user in self.users.values():
            if user.email.lower() == email.strip().lower():
                return user
        return None

    async def create(self, data: Dict[str, Any]) -> int:
        user = AdminUser(
            id=self._next_id,
            email=data["email"].strip().lower(),
            password_hash=data["password_hash"],
            role=data.get("role", AdminRole.SUPER_ADMIN.value),
            created_at=datetime.now(timezone.utc),
        )
        self.users[user.id] = user
        self._next_id += 1
        return user.id

    async def set_otp(self, user_id: int, otp: str, expiry: datetime) -> bool:
        user = self.users.get(user_id)
        if user is None:
            return False
        user.otp, user.otp_expiry = otp, expiry
        return True

    async def clear_otp(self, user_id: int) -> bool:
        user = self.users.get(user_id)
        if user is None:
            return False
        user.otp, user.otp_expiry = None, None
        return True


class InMemoryLeads:
    """Lead store with the LeadRepository interface."""

    def __init__(self) -> None:
        self.leads: List[Lead] = []

    async def get_by_id(self, id: int) -> Optional[Lead]:
        return next((lead for lead in self.leads if lead.id == id), None)

    async def get_by_email(self, email: str) -> Optional[Lead]:
        matches = [lead for lead in self.leads if lead.email.lower() == email.lower()]
        return matches[-1] if matches else None

    async def get_all(
        self,
        limit: int = 500,
        university: Optional[str] = None,
        preferred_country: Optional[str] = None,
    ) -> List[Lead]:
        rows = list(reversed(self.leads))
        if university:
            rows = [lead for lead in rows if lead.university == university]
        if preferred_country:
            rows = [lead for lead in rows if lead.preferred_country == preferred_country]
        return rows[:limit]

    async def create(self, data: Dict[str, Any]) -> Lead:
        if not data.get("name") or not data.get("email"):
            raise ValidationError("Name and email are required", field="email")
        now = datetime.now(timezone.utc) + timedelta(microseconds=len(self.leads))
        lead = Lead(
            id=len(self.leads) + 1,
            name=data["name"],
            phone=data.get("phone") or "",
            email=data["email"],
            service_type=data.get("service_type") or "",
            source=data["source"],
            status=data["status"],
            details=dict(data.get("details") or {}),
            university=data.get("university"),
            preferred_country=data.get("preferred_country"),
            created_at=now,
            updated_at=now,
        )
        self.leads.append(lead)
        return lead


class InMemoryEligibilityRecords:
    """Eligibility record store with the EligibilityRecordRepository interface."""

    def __init__(self) -> None:
        self.records: List[EligibilityRecord] = []

    async def get_by_id(self, id: int) -> Optional[EligibilityRecord]:
        return next((record for record in self.records if record.id == id), None)

    async def get_by_lead(self, lead_id: int) -> List[EligibilityRecord]:
        return [record for record in self.records if record.lead_id == lead_id]

    async def create(self, data: Dict[str, Any]) -> EligibilityRecord:
        record = EligibilityRecord(
            id=len(self.records) + 1,
            lead_id=data["lead_id"],
            sections={name: dict(values) for name, values in data.get("sections", {}).items()},
            analysis=dict(data.get("analysis") or {}),
            created_at=datetime.now(timezone.utc),
        )
        self.records.append(record)
        return record


@pytest.fixture
def admin_store() -> InMemoryAdminUsers:
    return InMemoryAdminUsers()


@pytest.fixture
def lead_store() -> InMemoryLeads:
    return InMemoryLeads()


@pytest.fixture
def record_store() -> InMemoryEligibilityRecords:
    return InMemoryEligibilityRecords()
