"""Lead repository implementation."""

from typing import Any, Dict, List, Optional

from loguru import logger

from leadflow.core.enums import LeadSource, LeadStatus
from leadflow.core.exceptions import ValidationError
from leadflow.repositories.base import BaseRepository
from leadflow.repositories.entities import Lead

_COLUMNS = (
    "id, name, phone, email, service_type, source, status, details, "
    "university, preferred_country, created_at, updated_at"
)


class LeadRepository(BaseRepository[Lead]):
    """Repository for inbound enquiries."""

    table_name = "leads"

    def _row_to_lead(self, row: Any) -> Lead:
        """Convert database row to Lead entity."""
        return Lead(
            id=row["id"],
            name=row["name"],
            phone=row["phone"],
            email=row["email"],
            service_type=row["service_type"],
            source=row["source"],
            status=row["status"],
            details=row["details"],
            university=row["university"],
            preferred_country=row["preferred_country"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    async def get_by_id(self, id: int) -> Optional[Lead]:
        """
        Get lead by ID.

        Args:
            id: Lead ID

        Returns:
            Lead entity or None if not found
        """
        async with self._connection() as conn:
            row = await conn.fetchrow(f"SELECT {_COLUMNS} FROM leads WHERE id = $1", id)
            return self._row_to_lead(row) if row else None

    async def get_by_email(self, email: str) -> Optional[Lead]:
        """
        Get the most recent lead for an email address.

        Args:
            email: Lead email

        Returns:
            Lead entity or None if not found
        """
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {_COLUMNS} FROM leads
                WHERE LOWER(email) = LOWER($1)
                ORDER BY created_at DESC, id DESC
                LIMIT 1
                """,
                email,
            )
            return self._row_to_lead(row) if row else None

    async def get_all(
        self,
        limit: int = 500,
        university: Optional[str] = None,
        preferred_country: Optional[str] = None,
    ) -> List[Lead]:
        """
        Get leads newest first, optionally filtered.

        Args:
            limit: Maximum number of leads to return
            university: Exact university filter
            preferred_country: Exact preferred-country filter

        Returns:
            List of lead entities
        """
        conditions = []
        params: List[Any] = []
        if university:
            params.append(university)
            conditions.append(f"university = ${len(params)}")
        if preferred_country:
            params.append(preferred_country)
            conditions.append(f"preferred_country = ${len(params)}")

        query = f"SELECT {_COLUMNS} FROM leads"
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        params.append(limit)
        query += f" ORDER BY created_at DESC, id DESC LIMIT ${len(params)}"

        async with self._connection() as conn:
            rows = await conn.fetch(query, *params)
            return [self._row_to_lead(row) for row in rows]

    async def create(self, data: Dict[str, Any]) -> Lead:
        """
        Create new lead.

        Args:
            data: name, email, and optionally phone, service_type, source,
                status, details, university, preferred_country

        Returns:
            Created lead entity

        Raises:
            ValidationError: If name or email is missing
        """
        if not data.get("name"):
            raise ValidationError("Name is required", field="name")
        if not data.get("email"):
            raise ValidationError("Email is required", field="email")

        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO leads
                    (name, phone, email, service_type, source, status, details,
                     university, preferred_country)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
                RETURNING {_COLUMNS}
                """,
                data["name"],
                data.get("phone") or "",
                data["email"],
                data.get("service_type") or "",
                data.get("source", LeadSource.WEBSITE.value),
                data.get("status", LeadStatus.ENQUIRY_RECEIVED.value),
                data.get("details") or {},
                data.get("university"),
                data.get("preferred_country"),
            )

        lead = self._row_to_lead(row)
        logger.info(f"Lead {lead.id} created (source={lead.source})")
        return lead
