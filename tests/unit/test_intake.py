"""Tests for LeadIntakeService over in-memory repositories."""

from unittest.mock import MagicMock

import pytest

from leadflow.constants.eligibility import Eligibility
from leadflow.core.enums import LeadSource, LeadStatus
from leadflow.core.exceptions import ValidationError
from leadflow.services.intake import LeadIntakeService
from leadflow.services.notification import NotificationService


@pytest.fixture
def notifier():
    return MagicMock(spec=NotificationService)


@pytest.fixture
def service(lead_store, record_store, notifier):
    return LeadIntakeService(lead_store, record_store, notifier)


def _submission(**overrides):
    sections = {
        "studentDetails": {
            "fullName": "Asha Rao",
            "emailId": "asha@example.com",
            "mobileNumber": "9876543210",
            "aadhaarNumber": "123456789012",
            "panNumber": "ABCDE1234F",
        },
        "loanRequirement": {"requiredAmount": "40,00,000", "preferredType": "Unsecured"},
        "coApplicant": {"monthlyIncome": "50000"},
        "collateral": {"marketValue": ""},
    }
    sections.update(overrides)
    return sections


class TestSubmitEnquiry:
    @pytest.mark.asyncio
    async def test_creates_website_lead(self, service, lead_store, notifier):
        lead = await service.submit_enquiry(
            "Ravi",
            "9000000000",
            "ravi@example.com",
            "Education Loan",
            {"university": "TU Munich", "preferredCountry": "Germany", "course": "MS CS"},
        )

        assert lead.id == 1
        assert lead.source == LeadSource.WEBSITE.value
        assert lead.status == LeadStatus.ENQUIRY_RECEIVED.value
        assert lead.university == "TU Munich"
        assert lead.preferred_country == "Germany"
        assert lead.details["course"] == "MS CS"
        notifier.notify_enquiry_confirmation.assert_called_once_with(
            "ravi@example.com",
            "Ravi",
            "Education Loan",
            {"university": "TU Munich", "preferredCountry": "Germany", "course": "MS CS"},
        )

    @pytest.mark.asyncio
    async def test_country_alias_and_intake_line(self, service, notifier):
        lead = await service.submit_enquiry(
            "Ravi",
            "9000000000",
            "ravi@example.com",
            "Study Abroad",
            {"country": "Canada", "intakeMonth": "September", "intakeYear": "2027"},
        )

        assert lead.preferred_country == "Canada"
        details = notifier.notify_enquiry_confirmation.call_args.args[3]
        assert details == {"preferredCountry": "Canada", "intake": "September 2027"}

    @pytest.mark.asyncio
    async def test_non_text_filter_fields_are_normalized(self, service, notifier):
        lead = await service.submit_enquiry(
            "Ravi",
            "9000000000",
            "ravi@example.com",
            "Study Abroad",
            {"university": 123, "preferredCountry": {"name": "Canada"}, "country": " Ireland "},
        )

        assert lead.university == "123"
        assert lead.preferred_country == "Ireland"
        assert lead.details["university"] == 123
        details = notifier.notify_enquiry_confirmation.call_args.args[3]
        assert details == {"university": "123", "preferredCountry": "Ireland"}

    @pytest.mark.asyncio
    async def test_nested_filter_values_are_dropped(self, service):
        lead = await service.submit_enquiry(
            "Ravi", "1", "ravi@example.com", "Visa", {"university": ["TU Munich"]}
        )

        assert lead.university is None
        assert lead.preferred_country is None

    @pytest.mark.asyncio
    async def test_every_enquiry_creates_a_new_lead(self, service, lead_store):
        await service.submit_enquiry("Ravi", "1", "ravi@example.com", "Visa")
        await service.submit_enquiry("Ravi", "1", "ravi@example.com", "Visa")

        assert len(lead_store.leads) == 2

    @pytest.mark.asyncio
    async def test_blank_service_type_uses_general_enquiry_in_email(self, service, notifier):
        await service.submit_enquiry("Ravi", "1", "ravi@example.com", "")

        assert notifier.notify_enquiry_confirmation.call_args.args[2] == "General Enquiry"

    @pytest.mark.asyncio
    async def test_works_without_notifier(self, lead_store, record_store):
        service = LeadIntakeService(lead_store, record_store)
        lead = await service.submit_enquiry("Ravi", "1", "ravi@example.com", "Visa")
        assert lead.id == 1


class TestCheckEligibility:
    @pytest.mark.asyncio
    async def test_eligible_profile(self, service, record_store, notifier):
        result = await service.check_eligibility(
            "Asha", "9876543210", "asha@example.com", 600000, 720
        )

        assert result.is_eligible
        assert result.estimated_range == Eligibility.SIMPLE_ELIGIBLE_RANGE
        record = record_store.records[0]
        assert record.sections["studentDetails"] == {
            "fullName": "Asha",
            "mobileNumber": "9876543210",
            "emailId": "asha@example.com",
        }
        assert record.analysis["isEligible"] is True
        assert record.analysis["status"] == "PENDING"
        notifier.notify_eligibility_result.assert_called_once_with(
            "asha@example.com", "Asha", True, Eligibility.SIMPLE_ELIGIBLE_RANGE
        )

    @pytest.mark.asyncio
    async def test_low_cibil_not_eligible(self, service):
        result = await service.check_eligibility("Asha", "1", "asha@example.com", 900000, 600)

        assert not result.is_eligible
        assert result.estimated_range == "Undetermined"

    @pytest.mark.asyncio
    async def test_existing_lead_reused(self, service, lead_store, record_store):
        existing = await service.submit_enquiry("Asha", "1", "asha@example.com", "Visa")

        await service.check_eligibility("Asha", "1", "asha@example.com", 600000, 700)

        assert len(lead_store.leads) == 1
        assert record_store.records[0].lead_id == existing.id

    @pytest.mark.asyncio
    async def test_new_lead_uses_eligibility_source(self, service, lead_store):
        await service.check_eligibility("Asha", "1", "asha@example.com", 1, 1)

        lead = lead_store.leads[0]
        assert lead.source == LeadSource.ELIGIBILITY.value
        assert lead.service_type == "Loan"


class TestComprehensiveEligibility:
    @pytest.mark.asyncio
    async def test_income_based_estimate(self, service, notifier):
        result, record = await service.comprehensive_eligibility(_submission())

        assert result.is_eligible
        assert result.max_eligible_amount == 3000000
        assert record.analysis == {
            "isEligible": True,
            "maxEligibleAmount": 3000000,
            "recommendedLoanType": "Unsecured",
            "suggestedBanks": result.suggested_banks,
            "status": "PENDING",
        }
        notifier.notify_eligibility_result.assert_called_once_with(
            "asha@example.com", "Asha Rao", True, Eligibility.COMPREHENSIVE_RANGE
        )

    @pytest.mark.asyncio
    async def test_ids_masked_only_in_stored_copy(self, service):
        submission = _submission()

        _result, record = await service.comprehensive_eligibility(submission)

        stored = record.sections["studentDetails"]
        assert stored["aadhaarNumber"] == "********9012"
        assert stored["panNumber"] == "******234F"
        assert stored["fullName"] == "Asha Rao"
        assert submission["studentDetails"]["aadhaarNumber"] == "123456789012"

    @pytest.mark.asyncio
    async def test_absent_ids_stored_as_empty_strings(self, service):
        student = {"fullName": "Asha Rao", "emailId": "asha@example.com", "mobileNumber": "98"}

        _result, record = await service.comprehensive_eligibility(
            _submission(studentDetails=student)
        )

        stored = record.sections["studentDetails"]
        assert stored["aadhaarNumber"] == ""
        assert stored["panNumber"] == ""

    @pytest.mark.asyncio
    async def test_numeric_fields_cleaned(self, service):
        _result, record = await service.comprehensive_eligibility(_submission())

        assert record.sections["loanRequirement"]["requiredAmount"] == 4000000
        assert record.sections["coApplicant"]["monthlyIncome"] == 50000
        assert record.sections["collateral"]["marketValue"] == 0
        assert record.sections["loanRequirement"]["totalCost"] == 0
        assert record.sections["loanRequirement"]["preferredType"] == "Unsecured"

    @pytest.mark.asyncio
    async def test_secured_uses_collateral(self, service):
        result, _record = await service.comprehensive_eligibility(
            _submission(
                loanRequirement={"preferredType": "Secured"},
                coApplicant={"monthlyIncome": 0},
                collateral={"marketValue": 6000000},
            )
        )

        assert result.max_eligible_amount == 4200000
        assert result.recommended_loan_type == "Secured"

    @pytest.mark.asyncio
    async def test_not_eligible_still_stored(self, service, record_store):
        result, record = await service.comprehensive_eligibility(
            _submission(coApplicant={"monthlyIncome": "10000"})
        )

        assert not result.is_eligible
        assert record.analysis["maxEligibleAmount"] == 0
        assert record.analysis["suggestedBanks"] == []
        assert len(record_store.records) == 1

    @pytest.mark.asyncio
    async def test_missing_student_details(self, service, lead_store):
        submission = _submission(studentDetails={"fullName": "Asha Rao"})

        with pytest.raises(ValidationError) as exc_info:
            await service.comprehensive_eligibility(submission)

        assert exc_info.value.field == "studentDetails"
        assert lead_store.leads == []


class TestRecordChatMessage:
    @pytest.mark.asyncio
    async def test_chat_lead(self, service, lead_store, notifier):
        lead = await service.record_chat_message("Meera", None, "meera@example.com", "Hi there")

        assert lead.source == LeadSource.CHAT.value
        assert lead.status == "new"
        assert lead.service_type == "General Inquiry"
        assert lead.phone == ""
        assert lead.details == {"initialMessage": "Hi there"}
        notifier.notify_enquiry_confirmation.assert_not_called()
