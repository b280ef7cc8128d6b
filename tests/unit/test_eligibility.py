"""Tests for the eligibility strategies."""

import pytest

from leadflow.constants.eligibility import SUGGESTED_BANKS, EligibilityMessages
from leadflow.services.eligibility import (
    EligibilityResult,
    clamp_amount,
    evaluate_comprehensive,
    evaluate_simple,
    to_number,
)


class TestComprehensive:
    """Income-or-collateral strategy."""

    def test_low_income_clamped_up_to_thirty_lakhs(self):
        result = evaluate_comprehensive(
            monthly_income=50000, collateral_value=0, preferred_type="Unsecured"
        )
        assert result.is_eligible is True
        assert result.max_eligible_amount == 3000000
        assert result.recommended_loan_type == "Unsecured"
        assert result.suggested_banks == SUGGESTED_BANKS
        assert result.message == EligibilityMessages.COMPREHENSIVE_ELIGIBLE

    def test_income_within_band_kept(self):
        # 90000 * 12 * 4 = 4,320,000
        result = evaluate_comprehensive(monthly_income=90000, collateral_value=0)
        assert result.max_eligible_amount == 4320000

    def test_high_income_clamped_down_to_fifty_lakhs(self):
        result = evaluate_comprehensive(monthly_income=500000, collateral_value=0)
        assert result.max_eligible_amount == 5000000

    def test_secured_uses_collateral_ltv(self):
        # 6,000,000 * 0.7 = 4,200,000
        result = evaluate_comprehensive(
            monthly_income=0, collateral_value=6000000, preferred_type="Secured"
        )
        assert result.is_eligible is True
        assert result.max_eligible_amount == 4200000
        assert result.recommended_loan_type == "Secured"

    def test_secured_without_collateral_falls_back_to_income(self):
        result = evaluate_comprehensive(
            monthly_income=100000, collateral_value=0, preferred_type="Secured"
        )
        assert result.max_eligible_amount == 4800000
        assert result.recommended_loan_type == "Secured"

    def test_unsecured_preference_ignores_collateral_value(self):
        result = evaluate_comprehensive(
            monthly_income=0, collateral_value=10000000, preferred_type="Unsecured"
        )
        assert result.is_eligible is True
        assert result.max_eligible_amount == 3000000

    def test_collateral_alone_makes_eligible(self):
        result = evaluate_comprehensive(monthly_income=1000, collateral_value=1)
        assert result.is_eligible is True

    def test_income_threshold_is_inclusive(self):
        assert evaluate_comprehensive(monthly_income=25000, collateral_value=0).is_eligible
        assert not evaluate_comprehensive(monthly_income=24999, collateral_value=0).is_eligible

    @pytest.mark.parametrize("monthly_income", [0, 1000, 24999, None, "", "abc"])
    def test_not_eligible_means_zero_amount_and_no_banks(self, monthly_income):
        result = evaluate_comprehensive(monthly_income=monthly_income, collateral_value=0)
        assert result.is_eligible is False
        assert result.max_eligible_amount == 0
        assert result.suggested_banks == []
        assert result.message == EligibilityMessages.COMPREHENSIVE_REVIEW

    def test_not_eligible_recommends_unsecured_regardless_of_preference(self):
        result = evaluate_comprehensive(
            monthly_income=1000, collateral_value=0, preferred_type="Secured"
        )
        assert result.is_eligible is False
        assert result.recommended_loan_type == "Unsecured"

    def test_no_preference_recommends_unsecured(self):
        result = evaluate_comprehensive(monthly_income=0, collateral_value=0)
        assert result.recommended_loan_type == "Unsecured"

    def test_string_inputs_are_coerced(self):
        result = evaluate_comprehensive(
            monthly_income="1,00,000", collateral_value="", preferred_type="Unsecured"
        )
        assert result.is_eligible is True
        assert result.max_eligible_amount == 4800000

    @pytest.mark.parametrize(
        "monthly_income,collateral",
        [(25000, 0), (10**7, 0), (0, 1), (0, 10**9), (123456, 7654321)],
    )
    @pytest.mark.parametrize("preferred", ["Secured", "Unsecured", None])
    def test_eligible_amount_always_within_band(self, monthly_income, collateral, preferred):
        result = evaluate_comprehensive(monthly_income, collateral, preferred_type=preferred)
        assert result.is_eligible
        assert 3000000 <= result.max_eligible_amount <= 5000000

    def test_result_is_pure(self):
        first = evaluate_comprehensive(60000, 2000000, 4000000, "Secured")
        second = evaluate_comprehensive(60000, 2000000, 4000000, "Secured")
        assert first == second

    def test_analysis_document(self):
        result = evaluate_comprehensive(50000, 0, preferred_type="Unsecured")
        analysis = result.to_analysis("PENDING")
        assert analysis == {
            "isEligible": True,
            "maxEligibleAmount": 3000000,
            "recommendedLoanType": "Unsecured",
            "suggestedBanks": SUGGESTED_BANKS,
            "status": "PENDING",
        }


class TestSimple:
    """Income-and-credit-score strategy."""

    def test_eligible(self):
        result = evaluate_simple(income=300000, cibil_score=650)
        assert isinstance(result, EligibilityResult)
        assert result.is_eligible is True
        assert result.estimated_range == "₹30–40 Lakhs"
        assert result.max_eligible_amount == 5000000
        assert result.message == EligibilityMessages.SIMPLE_ELIGIBLE

    @pytest.mark.parametrize("income,score", [(299999, 800), (900000, 649), (0, 0)])
    def test_not_eligible(self, income, score):
        result = evaluate_simple(income=income, cibil_score=score)
        assert result.is_eligible is False
        assert result.estimated_range == "Undetermined"
        assert result.max_eligible_amount == 0
        assert result.message == EligibilityMessages.SIMPLE_REVIEW

    def test_numeric_strings_accepted(self):
        assert evaluate_simple("450000", "720").is_eligible

    def test_both_conditions_required(self):
        # High income but no score fails here, unlike the comprehensive rule
        assert not evaluate_simple(income=5000000, cibil_score=None).is_eligible


class TestClampAmount:
    """Clamp into the fixed business band."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (0, 3000000),
            (2400000, 3000000),
            (3000000, 3000000),
            (4200000.4, 4200000),
            (4200000.5, 4200000),
            (4999999.9, 4999999),
            (5000000, 5000000),
            (9.9e9, 5000000),
        ],
    )
    def test_clamp(self, raw, expected):
        assert clamp_amount(raw) == expected

    @pytest.mark.parametrize("raw", [1, 3500000, 4999999.6, 10**12])
    def test_clamp_is_idempotent(self, raw):
        once = clamp_amount(raw)
        assert clamp_amount(once) == once


class TestToNumber:
    """Form value coercion."""

    @pytest.mark.parametrize(
        "value,expected",
        [(None, 0), ("", 0), ("   ", 0), ("abc", 0), (float("nan"), 0), (float("inf"), 0),
         (True, 0), ("42", 42), ("1,50,000", 150000), (12.5, 12.5), ("7.0", 7), (3, 3)],
    )
    def test_coercion(self, value, expected):
        assert to_number(value) == expected

    def test_integral_values_become_int(self):
        assert isinstance(to_number("100.0"), int)
