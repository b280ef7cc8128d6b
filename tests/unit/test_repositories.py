"""Tests for repositories and the database wrapper with mocked asyncpg connections."""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest

from leadflow.core.config.settings import get_settings
from leadflow.core.exceptions import (
    DatabaseError,
    DatabaseNotConnectedError,
    DatabasePoolTimeoutError,
    ValidationError,
)
from leadflow.models.database import Database, DatabaseState
from leadflow.models.db_factory import DatabaseFactory
from leadflow.repositories import (
    RECORD_SECTIONS,
    AdminUserRepository,
    EligibilityRecordRepository,
    LeadRepository,
)

NOW = datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)


def _db(conn):
    db = MagicMock()

    @asynccontextmanager
    async def get_connection(timeout: float = 30.0):
        yield conn

    db.get_connection = get_connection
    return db


def _lead_row(**overrides):
    row = {
        "id": 1,
        "name": "Ravi",
        "phone": "9000000000",
        "email": "ravi@example.com",
        "service_type": "Education Loan",
        "source": "website",
        "status": "ENQUIRY_RECEIVED",
        "details": {"course": "MS CS"},
        "university": "TU Munich",
        "preferred_country": "Germany",
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


@pytest.fixture
def conn():
    return AsyncMock()


class TestAdminUserRepository:
    @pytest.mark.asyncio
    async def test_get_by_email(self, conn):
        conn.fetchrow.return_value = {
            "id": 3,
            "email": "admin@jvoverseas.com",
            "password": "$2b$12$hash",
            "role": "SUPER_ADMIN",
            "otp": None,
            "otp_expiry": None,
            "created_at": NOW,
        }
        repo = AdminUserRepository(_db(conn))

        admin = await repo.get_by_email("Admin@JVOverseas.com")

        assert admin.id == 3
        assert admin.password_hash == "$2b$12$hash"
        assert not admin.has_pending_otp
        assert "LOWER(email) = LOWER($1)" in conn.fetchrow.await_args.args[0]
        assert admin.to_dict() == {
            "id": 3,
            "email": "admin@jvoverseas.com",
            "role": "SUPER_ADMIN",
            "createdAt": NOW.isoformat(),
        }

    @pytest.mark.asyncio
    async def test_missing_user(self, conn):
        conn.fetchrow.return_value = None
        assert await AdminUserRepository(_db(conn)).get_by_id(99) is None

    @pytest.mark.asyncio
    async def test_create_normalizes_email(self, conn):
        conn.fetchval.return_value = 5
        repo = AdminUserRepository(_db(conn))

        admin_id = await repo.create({"email": " Admin@Example.com ", "password_hash": "h"})

        assert admin_id == 5
        args = conn.fetchval.await_args.args
        assert args[1:] == ("admin@example.com", "h", "SUPER_ADMIN")

    @pytest.mark.asyncio
    async def test_create_requires_email_and_hash(self, conn):
        repo = AdminUserRepository(_db(conn))

        with pytest.raises(ValidationError):
            await repo.create({"password_hash": "h"})
        with pytest.raises(ValidationError):
            await repo.create({"email": "a@b.com"})
        conn.fetchval.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_and_clear_otp(self, conn):
        conn.execute.return_value = "UPDATE 1"
        repo = AdminUserRepository(_db(conn))
        expiry = NOW + timedelta(minutes=5)

        assert await repo.set_otp(3, "123456", expiry) is True
        assert conn.execute.await_args.args[1:] == (3, "123456", expiry)

        assert await repo.clear_otp(3) is True
        assert "otp = NULL" in conn.execute.await_args.args[0]

    @pytest.mark.asyncio
    async def test_set_otp_unknown_user(self, conn):
        conn.execute.return_value = "UPDATE 0"
        assert await AdminUserRepository(_db(conn)).set_otp(9, "1", NOW) is False


class TestLeadRepository:
    @pytest.mark.asyncio
    async def test_create_with_defaults(self, conn):
        conn.fetchrow.return_value = _lead_row(service_type="", details={})
        repo = LeadRepository(_db(conn))

        lead = await repo.create({"name": "Ravi", "email": "ravi@example.com"})

        args = conn.fetchrow.await_args.args
        assert args[1:] == (
            "Ravi",
            "",
            "ravi@example.com",
            "",
            "website",
            "ENQUIRY_RECEIVED",
            {},
            None,
            None,
        )
        assert lead.to_dict()["serviceType"] == ""

    @pytest.mark.asyncio
    async def test_create_requires_name_and_email(self, conn):
        repo = LeadRepository(_db(conn))

        with pytest.raises(ValidationError) as exc_info:
            await repo.create({"email": "ravi@example.com"})
        assert exc_info.value.field == "name"

        with pytest.raises(ValidationError) as exc_info:
            await repo.create({"name": "Ravi"})
        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_get_all_with_filters(self, conn):
        conn.fetch.return_value = [_lead_row(), _lead_row(id=2)]
        repo = LeadRepository(_db(conn))

        leads = await repo.get_all(limit=10, university="TU Munich", preferred_country="Germany")

        query, *params = conn.fetch.await_args.args
        assert "university = $1 AND preferred_country = $2" in query
        assert query.endswith("ORDER BY created_at DESC, id DESC LIMIT $3")
        assert params == ["TU Munich", "Germany", 10]
        assert [lead.id for lead in leads] == [1, 2]

    @pytest.mark.asyncio
    async def test_get_all_unfiltered(self, conn):
        conn.fetch.return_value = []
        await LeadRepository(_db(conn)).get_all()

        query, *params = conn.fetch.await_args.args
        assert "WHERE" not in query
        assert params == [500]

    @pytest.mark.asyncio
    async def test_lead_wire_shape(self, conn):
        conn.fetchrow.return_value = _lead_row()

        lead = await LeadRepository(_db(conn)).get_by_id(1)

        data = lead.to_dict()
        assert data["id"] == 1
        assert data["preferredCountry"] == "Germany"
        assert data["createdAt"] == NOW.isoformat()
        assert "_id" not in data


class TestEligibilityRecordRepository:
    @pytest.mark.asyncio
    async def test_create_orders_sections(self, conn):
        row = {"id": 7, "lead_id": 1, "analysis": {"isEligible": True}, "created_at": NOW}
        row.update({column: {} for column in RECORD_SECTIONS.values()})
        row["student_details"] = {"fullName": "Asha"}
        conn.fetchrow.return_value = row
        repo = EligibilityRecordRepository(_db(conn))

        record = await repo.create(
            {
                "lead_id": 1,
                "sections": {"studentDetails": {"fullName": "Asha"}, "collateral": {"x": 1}},
                "analysis": {"isEligible": True},
            }
        )

        query, *params = conn.fetchrow.await_args.args
        assert "VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)" in query
        assert params[0] == 1
        assert params[1] == {"fullName": "Asha"}
        assert params[7] == {"x": 1}
        assert params[-1] == {"isEligible": True}
        assert record.id == 7
        assert record.to_dict()["lead"] == 1
        assert record.to_dict()["studentDetails"] == {"fullName": "Asha"}

    @pytest.mark.asyncio
    async def test_create_requires_lead(self, conn):
        with pytest.raises(ValidationError):
            await EligibilityRecordRepository(_db(conn)).create({"sections": {}})


class TestConnectionErrors:
    @pytest.mark.asyncio
    async def test_driver_errors_become_database_errors(self, conn):
        conn.fetchrow.side_effect = OSError("connection reset")
        repo = LeadRepository(_db(conn))

        with pytest.raises(DatabaseError) as exc_info:
            await repo.get_by_id(1)

        assert exc_info.value.details == {"error_type": "OSError"}
        assert "leads" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_interface_errors_wrapped(self, conn):
        conn.fetchval.side_effect = asyncpg.InterfaceError("connection is closed")

        with pytest.raises(DatabaseError):
            await AdminUserRepository(_db(conn)).create({"email": "a@b.com", "password_hash": "h"})


class TestDatabase:
    def test_requires_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            Database()

    def test_initial_state(self):
        db = Database("postgresql://localhost/leadflow", pool_size=4)
        assert db.state == DatabaseState.DISCONNECTED
        assert db.pool_size == 4

    @pytest.mark.asyncio
    async def test_get_connection_before_connect(self):
        db = Database("postgresql://localhost/leadflow")

        with pytest.raises(DatabaseNotConnectedError):
            async with db.get_connection():
                pass

    @pytest.mark.asyncio
    async def test_pool_timeout(self):
        db = Database("postgresql://localhost/leadflow", pool_size=2)
        db.pool = MagicMock()
        db.pool.acquire = AsyncMock(side_effect=asyncio.TimeoutError())

        with pytest.raises(DatabasePoolTimeoutError):
            async with db.get_connection(timeout=0.1):
                pass

    @pytest.mark.asyncio
    async def test_health_check(self):
        db = Database("postgresql://localhost/leadflow")
        connection = AsyncMock()
        connection.fetchval.return_value = 1
        db.pool = MagicMock()
        db.pool.acquire = AsyncMock(return_value=connection)
        db.pool.release = AsyncMock()

        assert await db.health_check() is True
        assert db.state == DatabaseState.CONNECTED
        db.pool.release.assert_awaited_once_with(connection)

    @pytest.mark.asyncio
    async def test_health_check_when_disconnected(self):
        assert await Database("postgresql://localhost/leadflow").health_check() is False


class TestDatabaseFactory:
    def setup_method(self):
        DatabaseFactory.reset_instance()

    def teardown_method(self):
        DatabaseFactory.reset_instance()

    def test_singleton(self):
        first = DatabaseFactory.get_instance("postgresql://localhost/leadflow")
        assert DatabaseFactory.get_instance() is first

    @pytest.mark.asyncio
    async def test_connect_opens_pool_once(self, monkeypatch):
        monkeypatch.setenv("DB_POOL_SIZE", "3")
        connect = AsyncMock()
        monkeypatch.setattr(Database, "connect", connect)

        db = await DatabaseFactory.connect(get_settings())
        db.pool = MagicMock()
        again = await DatabaseFactory.connect(get_settings())

        assert again is db
        assert db.pool_size == 3
        assert db.database_url == "postgresql://localhost:5432/leadflow_test"
        connect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_instance_clears_singleton(self):
        db = DatabaseFactory.get_instance("postgresql://localhost/leadflow")
        db.close = AsyncMock()

        await DatabaseFactory.close_instance()

        db.close.assert_awaited_once()
        assert DatabaseFactory.get_instance("postgresql://localhost/other") is not db
