"""Centralized enum definitions for Leadflow."""

from enum import Enum


class LeadSource(str, Enum):
    """Where a lead entered the system."""
    WEBSITE = "website"
    CHAT = "chat"
    ELIGIBILITY = "eligibility"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class LeadStatus(str, Enum):
    """Lead lifecycle status values."""
    NEW = "new"
    ENQUIRY_RECEIVED = "ENQUIRY_RECEIVED"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    CLOSED = "closed"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class LoanType(str, Enum):
    """Education loan types."""
    SECURED = "Secured"
    UNSECURED = "Unsecured"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class AnalysisStatus(str, Enum):
    """Review status of an eligibility analysis."""
    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]


class AdminRole(str, Enum):
    """Roles an admin user can hold."""
    SUPER_ADMIN = "SUPER_ADMIN"

    @classmethod
    def values(cls) -> list:
        """Return list of all enum values."""
        return [e.value for e in cls]
