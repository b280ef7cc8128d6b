"""Repository pattern implementation for data access layer."""

from leadflow.repositories.admin_user_repository import AdminUserRepository
from leadflow.repositories.base import BaseRepository
from leadflow.repositories.eligibility_repository import EligibilityRecordRepository
from leadflow.repositories.entities import RECORD_SECTIONS, AdminUser, EligibilityRecord, Lead
from leadflow.repositories.lead_repository import LeadRepository

__all__ = [
    "BaseRepository",
    "AdminUser",
    "AdminUserRepository",
    "Lead",
    "LeadRepository",
    "EligibilityRecord",
    "EligibilityRecordRepository",
    "RECORD_SECTIONS",
]
