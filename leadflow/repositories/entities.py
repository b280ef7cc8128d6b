"""Entity models returned by repositories."""

from datetime import datetime
from typing import Any, Dict, Optional

# Wire name -> column name for the document-shaped record sections
RECORD_SECTIONS = {
    "studentDetails": "student_details",
    "academics": "academics",
    "courseDetails": "course_details",
    "testScores": "test_scores",
    "loanRequirement": "loan_requirement",
    "coApplicant": "co_applicant",
    "collateral": "collateral",
    "additionalInfo": "additional_info",
}


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


class AdminUser:
    """Admin user entity model."""

    def __init__(
        self,
        id: int,
        email: str,
        password_hash: str,
        role: str,
        otp: Optional[str] = None,
        otp_expiry: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
    ):
        """Initialize admin user entity."""
        self.id = id
        self.email = email
        self.password_hash = password_hash
        self.role = role
        self.otp = otp
        self.otp_expiry = otp_expiry
        self.created_at = created_at

    @property
    def has_pending_otp(self) -> bool:
        """True when an OTP and its expiry are both stored."""
        return bool(self.otp) and self.otp_expiry is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert admin user to dictionary (credentials and OTP excluded)."""
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role,
            "createdAt": _iso(self.created_at),
        }


class Lead:
    """Lead entity model."""

    def __init__(
        self,
        id: int,
        name: str,
        phone: str,
        email: str,
        service_type: str,
        source: str,
        status: str,
        details: Optional[Dict[str, Any]] = None,
        university: Optional[str] = None,
        preferred_country: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        """Initialize lead entity."""
        self.id = id
        self.name = name
        self.phone = phone
        self.email = email
        self.service_type = service_type
        self.source = source
        self.status = status
        self.details = details or {}
        self.university = university
        self.preferred_country = preferred_country
        self.created_at = created_at
        self.updated_at = updated_at

    def to_dict(self) -> Dict[str, Any]:
        """Convert lead to its JSON wire shape."""
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "serviceType": self.service_type,
            "source": self.source,
            "status": self.status,
            "details": self.details,
            "university": self.university,
            "preferredCountry": self.preferred_country,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class EligibilityRecord:
    """Detailed eligibility application snapshot linked to one lead."""

    def __init__(
        self,
        id: int,
        lead_id: int,
        sections: Optional[Dict[str, Dict[str, Any]]] = None,
        analysis: Optional[Dict[str, Any]] = None,
        created_at: Optional[datetime] = None,
    ):
        """
        Initialize eligibility record entity.

        Args:
            id: Record ID
            lead_id: Owning lead ID
            sections: Mapping of wire section name (e.g. studentDetails) to its fields
            analysis: Embedded analysis result
            created_at: Creation timestamp
        """
        self.id = id
        self.lead_id = lead_id
        self.sections = {name: dict((sections or {}).get(name) or {}) for name in RECORD_SECTIONS}
        self.analysis = analysis or {}
        self.created_at = created_at

    def to_dict(self) -> Dict[str, Any]:
        """Convert eligibility record to its JSON wire shape."""
        data: Dict[str, Any] = {"id": self.id, "lead": self.lead_id}
        data.update(self.sections)
        data["analysis"] = self.analysis
        data["createdAt"] = _iso(self.created_at)
        return data
