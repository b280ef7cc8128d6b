"""Lead intake: enquiries, chat messages and eligibility submissions."""

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple

from loguru import logger

from leadflow.constants.eligibility import Eligibility
from leadflow.core.enums import AnalysisStatus, LeadSource, LeadStatus
from leadflow.core.exceptions import ValidationError
from leadflow.repositories.eligibility_repository import EligibilityRecordRepository
from leadflow.repositories.entities import RECORD_SECTIONS, EligibilityRecord, Lead
from leadflow.repositories.lead_repository import LeadRepository
from leadflow.services.eligibility import (
    EligibilityResult,
    evaluate_comprehensive,
    evaluate_simple,
    to_number,
)
from leadflow.utils.masking import mask_email, mask_id_fields

if TYPE_CHECKING:
    from leadflow.services.notification.service import NotificationService

DEFAULT_ENQUIRY_TYPE = "General Enquiry"
LOAN_SERVICE_TYPE = "Loan"
CHAT_SERVICE_TYPE = "General Inquiry"

# Numeric fields cleaned before an eligibility record is stored
NUMERIC_FIELDS = {
    "loanRequirement": ("totalCost", "requiredAmount", "selfContribution"),
    "coApplicant": ("monthlyIncome",),
    "collateral": ("marketValue",),
}


def _text_field(value: Any) -> Optional[str]:
    """Scalar form value as text for a filter column; None for blanks and nested values."""
    if isinstance(value, (str, int, float)):
        text = str(value).strip()
        return text or None
    return None


class LeadIntakeService:
    """Persist inbound leads and queue their confirmation emails."""

    def __init__(
        self,
        leads: LeadRepository,
        records: EligibilityRecordRepository,
        notifier: Optional["NotificationService"] = None,
    ):
        """
        Initialize intake service.

        Args:
            leads: Lead repository
            records: Eligibility record repository
            notifier: Notification service for confirmation emails
        """
        self._leads = leads
        self._records = records
        self._notifier = notifier

    async def submit_enquiry(
        self,
        name: str,
        phone: str,
        email: str,
        service_type: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> Lead:
        """
        Record a website enquiry and queue its confirmation email.

        A new lead is created for every enquiry, even from a known email.

        Args:
            name: Applicant name
            phone: Applicant phone
            email: Applicant email
            service_type: Requested service
            details: Free-form form payload

        Returns:
            Created lead
        """
        details = dict(details or {})
        university = _text_field(details.get("university"))
        preferred_country = _text_field(details.get("preferredCountry")) or _text_field(
            details.get("country")
        )

        logger.info(f"Processing new enquiry from {mask_email(email)} - Type: {service_type}")
        lead = await self._leads.create(
            {
                "name": name,
                "phone": phone,
                "email": email,
                "service_type": service_type,
                "source": LeadSource.WEBSITE.value,
                "status": LeadStatus.ENQUIRY_RECEIVED.value,
                "details": details,
                "university": university,
                "preferred_country": preferred_country,
            }
        )

        email_details: Dict[str, Any] = {}
        if university:
            email_details["university"] = university
        if preferred_country:
            email_details["preferredCountry"] = preferred_country
        if details.get("course"):
            email_details["course"] = details["course"]
        if details.get("intakeMonth") and details.get("intakeYear"):
            email_details["intake"] = f"{details['intakeMonth']} {details['intakeYear']}"

        if self._notifier is not None:
            self._notifier.notify_enquiry_confirmation(
                email, name, service_type or DEFAULT_ENQUIRY_TYPE, email_details
            )
        return lead

    async def _find_or_create_lead(
        self, name: str, phone: str, email: str, service_type: str
    ) -> Lead:
        lead = await self._leads.get_by_email(email)
        if lead is not None:
            return lead
        return await self._leads.create(
            {
                "name": name,
                "phone": phone,
                "email": email,
                "service_type": service_type,
                "source": LeadSource.ELIGIBILITY.value,
                "status": LeadStatus.ENQUIRY_RECEIVED.value,
            }
        )

    async def check_eligibility(
        self,
        name: str,
        phone: str,
        email: str,
        income: Any,
        cibil_score: Any,
        service_type: Optional[str] = None,
    ) -> EligibilityResult:
        """
        Simple eligibility check with a minimal stored record.

        Args:
            name: Applicant name
            phone: Applicant phone
            email: Applicant email
            income: Annual income
            cibil_score: Credit score
            service_type: Requested service (defaults to Loan)

        Returns:
            EligibilityResult from the simple strategy
        """
        lead = await self._find_or_create_lead(
            name, phone, email, service_type or LOAN_SERVICE_TYPE
        )
        result = evaluate_simple(income, cibil_score)

        await self._records.create(
            {
                "lead_id": lead.id,
                "sections": {
                    "studentDetails": {"fullName": name, "mobileNumber": phone, "emailId": email}
                },
                "analysis": {
                    "isEligible": result.is_eligible,
                    "maxEligibleAmount": result.max_eligible_amount,
                    "status": AnalysisStatus.PENDING.value,
                },
            }
        )

        if self._notifier is not None:
            self._notifier.notify_eligibility_result(
                email, name, result.is_eligible, result.estimated_range
            )
        return result

    async def comprehensive_eligibility(
        self, submission: Mapping[str, Any]
    ) -> Tuple[EligibilityResult, EligibilityRecord]:
        """
        Evaluate a multi-section application and store a masked snapshot.

        Eligibility is computed on the raw inputs; numeric cleanup and ID
        masking apply only to the stored copy.

        Args:
            submission: Mapping of section name (studentDetails, academics,
                courseDetails, testScores, loanRequirement, coApplicant,
                collateral, additionalInfo) to its fields

        Returns:
            (EligibilityResult, stored EligibilityRecord)

        Raises:
            ValidationError: If student name, email or phone is missing
        """
        sections = {name: dict(submission.get(name) or {}) for name in RECORD_SECTIONS}
        student = sections["studentDetails"]
        full_name = student.get("fullName")
        email = student.get("emailId")
        phone = student.get("mobileNumber")
        if not full_name or not email or not phone:
            raise ValidationError(
                "Student details (name, email, phone) are required", field="studentDetails"
            )

        lead = await self._find_or_create_lead(full_name, phone, email, LOAN_SERVICE_TYPE)

        result = evaluate_comprehensive(
            monthly_income=sections["coApplicant"].get("monthlyIncome"),
            collateral_value=sections["collateral"].get("marketValue"),
            required_amount=sections["loanRequirement"].get("requiredAmount"),
            preferred_type=sections["loanRequirement"].get("preferredType"),
        )

        stored = {name: dict(values) for name, values in sections.items()}
        stored["studentDetails"] = mask_id_fields(student)
        for section, fields in NUMERIC_FIELDS.items():
            for field_name in fields:
                stored[section][field_name] = to_number(stored[section].get(field_name))

        record = await self._records.create(
            {
                "lead_id": lead.id,
                "sections": stored,
                "analysis": result.to_analysis(AnalysisStatus.PENDING.value),
            }
        )

        if self._notifier is not None:
            self._notifier.notify_eligibility_result(
                email, full_name, result.is_eligible, Eligibility.COMPREHENSIVE_RANGE
            )
        return result, record

    async def record_chat_message(
        self, name: str, phone: Optional[str], email: str, message: Optional[str]
    ) -> Lead:
        """
        Save a chat widget message as a new lead.

        Args:
            name: Visitor name
            phone: Visitor phone
            email: Visitor email
            message: First chat message

        Returns:
            Created lead
        """
        return await self._leads.create(
            {
                "name": name,
                "phone": phone or "",
                "email": email,
                "service_type": CHAT_SERVICE_TYPE,
                "source": LeadSource.CHAT.value,
                "status": LeadStatus.NEW.value,
                "details": {"initialMessage": message},
            }
        )
