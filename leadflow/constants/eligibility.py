"""Eligibility scoring thresholds and static lender data."""

from typing import Final, List


class Eligibility:
    """Business thresholds for both eligibility strategies."""

    MIN_ANNUAL_INCOME: Final[int] = 300000
    MIN_CIBIL_SCORE: Final[int] = 650
    MIN_LOAN_AMOUNT: Final[int] = 3000000
    MAX_LOAN_AMOUNT: Final[int] = 5000000
    COLLATERAL_LTV: Final[float] = 0.7
    INCOME_MULTIPLIER: Final[int] = 4

    SIMPLE_ELIGIBLE_RANGE: Final[str] = "₹30–40 Lakhs"
    SIMPLE_UNDETERMINED_RANGE: Final[str] = "Undetermined"
    COMPREHENSIVE_RANGE: Final[str] = "₹30 Lakhs – ₹50 Lakhs"


SUGGESTED_BANKS: Final[List[str]] = [
    "Punjab National Bank (PNB)",
    "Avanse",
    "Credila",
    "Auxilo",
    "InCred",
    "Tata Capital",
    "Prodigy Finance",
    "Axis Bank",
    "ICICI Bank",
]


class EligibilityMessages:
    """Response messages shown to applicants."""

    COMPREHENSIVE_ELIGIBLE: Final[str] = (
        "Based on your profile and submitted details, you are eligible for an education "
        "loan ranging between ₹30 Lakhs – ₹50 Lakhs."
    )
    COMPREHENSIVE_REVIEW: Final[str] = (
        "We have received your details. Our senior loan advisor will contact you to "
        "discuss special cases for your eligibility."
    )
    SIMPLE_ELIGIBLE: Final[str] = (
        "Based on your profile, you may be eligible for an education loan of ₹30–40 Lakhs, "
        "with a maximum possibility up to ₹50 Lakhs, subject to bank approval."
    )
    SIMPLE_REVIEW: Final[str] = (
        "Based on preliminary checks, we need more info to determine your exact eligibility. "
        "Our counselors will contact you to discuss options."
    )
