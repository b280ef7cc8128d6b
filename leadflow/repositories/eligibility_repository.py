"""Eligibility record repository implementation."""

from typing import Any, Dict, List, Optional

from loguru import logger

from leadflow.core.exceptions import ValidationError
from leadflow.repositories.base import BaseRepository
from leadflow.repositories.entities import RECORD_SECTIONS, EligibilityRecord

_SECTION_COLUMNS = ", ".join(RECORD_SECTIONS.values())
_COLUMNS = f"id, lead_id, {_SECTION_COLUMNS}, analysis, created_at"


class EligibilityRecordRepository(BaseRepository[EligibilityRecord]):
    """Repository for detailed eligibility records."""

    table_name = "eligibility_records"

    def _row_to_record(self, row: Any) -> EligibilityRecord:
        """Convert database row to EligibilityRecord entity."""
        return EligibilityRecord(
            id=row["id"],
            lead_id=row["lead_id"],
            sections={wire: row[column] for wire, column in RECORD_SECTIONS.items()},
            analysis=row["analysis"],
            created_at=row["created_at"],
        )

    async def get_by_id(self, id: int) -> Optional[EligibilityRecord]:
        """
        Get eligibility record by ID.

        Args:
            id: Record ID

        Returns:
            EligibilityRecord entity or None if not found
        """
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"SELECT {_COLUMNS} FROM eligibility_records WHERE id = $1", id
            )
            return self._row_to_record(row) if row else None

    async def get_by_lead(self, lead_id: int) -> List[EligibilityRecord]:
        """
        Get all records for a lead, newest first.

        Args:
            lead_id: Owning lead ID

        Returns:
            List of eligibility records
        """
        async with self._connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {_COLUMNS} FROM eligibility_records
                WHERE lead_id = $1
                ORDER BY created_at DESC, id DESC
                """,
                lead_id,
            )
            return [self._row_to_record(row) for row in rows]

    async def create(self, data: Dict[str, Any]) -> EligibilityRecord:
        """
        Create new eligibility record.

        Args:
            data: lead_id, a "sections" mapping keyed by wire section name
                (studentDetails, academics, ...), and an "analysis" mapping

        Returns:
            Created eligibility record

        Raises:
            ValidationError: If lead_id is missing
        """
        if data.get("lead_id") is None:
            raise ValidationError("Lead reference is required", field="lead")

        sections = data.get("sections") or {}
        values = [dict(sections.get(wire) or {}) for wire in RECORD_SECTIONS]
        placeholders = ", ".join(f"${i}" for i in range(2, len(values) + 3))

        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO eligibility_records (lead_id, {_SECTION_COLUMNS}, analysis)
                VALUES ($1, {placeholders})
                RETURNING {_COLUMNS}
                """,
                data["lead_id"],
                *values,
                data.get("analysis") or {},
            )

        record = self._row_to_record(row)
        logger.info(f"Eligibility record {record.id} created for lead {record.lead_id}")
        return record
