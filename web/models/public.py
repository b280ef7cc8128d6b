"""Public intake request models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class IntakeRequest(BaseModel):
    """Website enquiry form."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    phone: str
    email: EmailStr
    service_type: str = Field(alias="serviceType")
    details: Optional[Dict[str, Any]] = None

    @field_validator("name", "phone", "service_type")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field is required")
        return v.strip()


class EligibilityCheckRequest(BaseModel):
    """Quick eligibility check form."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    phone: str = ""
    email: EmailStr
    income: float
    cibil_score: float = Field(alias="cibilScore")
    service_type: Optional[str] = Field(default=None, alias="serviceType")


class ComprehensiveEligibilityRequest(BaseModel):
    """
    Multi-step eligibility application.

    Sections stay free-form; required student fields are enforced by the
    intake service so its error message reaches the client unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    student_details: Optional[Dict[str, Any]] = Field(default=None, alias="studentDetails")
    academics: Optional[Dict[str, Any]] = None
    course_details: Optional[Dict[str, Any]] = Field(default=None, alias="courseDetails")
    test_scores: Optional[Dict[str, Any]] = Field(default=None, alias="testScores")
    loan_requirement: Optional[Dict[str, Any]] = Field(default=None, alias="loanRequirement")
    co_applicant: Optional[Dict[str, Any]] = Field(default=None, alias="coApplicant")
    collateral: Optional[Dict[str, Any]] = None
    additional_info: Optional[Dict[str, Any]] = Field(default=None, alias="additionalInfo")

    def sections(self) -> Dict[str, Dict[str, Any]]:
        """Section name (wire form) to its fields, empty dict for missing sections."""
        return {
            key: value or {} for key, value in self.model_dump(by_alias=True).items()
        }


class ChatMessageRequest(BaseModel):
    """Chat widget contact message."""

    name: str = Field(min_length=1)
    phone: Optional[str] = None
    email: EmailStr
    message: Optional[str] = None


class ChatConversationRequest(BaseModel):
    """Chatbot turn."""

    message: Optional[str] = None


class IntakeResponse(BaseModel):
    """Enquiry submission result."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Enquiry submitted successfully"
    lead_id: int = Field(alias="leadId")
    data: Dict[str, Any]


class EligibilityCheckResponse(BaseModel):
    """Quick eligibility check result."""

    eligible: bool
    message: str
