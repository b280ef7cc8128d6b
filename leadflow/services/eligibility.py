"""Education loan eligibility strategies.

Two independent rule sets share one result shape:

- ``evaluate_comprehensive``: income OR collateral, amount estimated from
  collateral (secured) or income (unsecured) and clamped to a fixed band.
- ``evaluate_simple``: income AND credit score, fixed display range.

Both are pure functions of their inputs.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from leadflow.constants.eligibility import SUGGESTED_BANKS, Eligibility, EligibilityMessages
from leadflow.core.enums import LoanType

__all__ = [
    "EligibilityResult",
    "SUGGESTED_BANKS",
    "clamp_amount",
    "evaluate_comprehensive",
    "evaluate_simple",
    "to_number",
]


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of an eligibility evaluation."""

    is_eligible: bool
    max_eligible_amount: int
    recommended_loan_type: str
    suggested_banks: List[str] = field(default_factory=list)
    estimated_range: str = Eligibility.SIMPLE_UNDETERMINED_RANGE
    message: str = ""

    def to_analysis(self, status: str) -> Dict[str, Any]:
        """Embedded analysis document stored on an eligibility record."""
        return {
            "isEligible": self.is_eligible,
            "maxEligibleAmount": self.max_eligible_amount,
            "recommendedLoanType": self.recommended_loan_type,
            "suggestedBanks": list(self.suggested_banks),
            "status": status,
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def to_number(value: Any) -> float:
    """
    Coerce a form value to a number.

    Blank strings, None, NaN, infinities and non-numeric text become 0.

    Args:
        value: Raw form value

    Returns:
        Numeric value
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return 0
        try:
            number = float(text)
        except ValueError:
            return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number) if number.is_integer() else number


def clamp_amount(
    amount: float,
    minimum: int = Eligibility.MIN_LOAN_AMOUNT,
    maximum: int = Eligibility.MAX_LOAN_AMOUNT,
) -> int:
    """
    Clamp a raw loan estimate into the fixed business band.

    Idempotent: clamping an already-clamped value returns it unchanged.

    Args:
        amount: Raw estimate
        minimum: Lower bound (inclusive)
        maximum: Upper bound (inclusive)

    Returns:
        Whole-unit amount within [minimum, maximum], fractions dropped
    """
    return int(math.floor(min(max(amount, minimum), maximum)))


def evaluate_comprehensive(
    monthly_income: Any,
    collateral_value: Any,
    required_amount: Any = None,
    preferred_type: Optional[str] = None,
) -> EligibilityResult:
    """
    Comprehensive eligibility: co-applicant income or collateral.

    Args:
        monthly_income: Co-applicant monthly income
        collateral_value: Collateral market value
        required_amount: Requested loan amount (recorded only)
        preferred_type: Applicant's preferred loan type (Secured or Unsecured)

    Returns:
        EligibilityResult with a clamped amount and the bank list when eligible
    """
    annual_income = to_number(monthly_income) * 12
    collateral = to_number(collateral_value)

    is_eligible = annual_income >= Eligibility.MIN_ANNUAL_INCOME or collateral > 0
    if not is_eligible:
        return EligibilityResult(
            is_eligible=False,
            max_eligible_amount=0,
            recommended_loan_type=LoanType.UNSECURED.value,
            suggested_banks=[],
            estimated_range=Eligibility.COMPREHENSIVE_RANGE,
            message=EligibilityMessages.COMPREHENSIVE_REVIEW,
        )

    recommended = preferred_type or LoanType.UNSECURED.value
    if preferred_type == LoanType.SECURED.value and collateral > 0:
        raw = collateral * Eligibility.COLLATERAL_LTV
    else:
        raw = annual_income * Eligibility.INCOME_MULTIPLIER

    return EligibilityResult(
        is_eligible=True,
        max_eligible_amount=clamp_amount(raw),
        recommended_loan_type=recommended,
        suggested_banks=list(SUGGESTED_BANKS),
        estimated_range=Eligibility.COMPREHENSIVE_RANGE,
        message=EligibilityMessages.COMPREHENSIVE_ELIGIBLE,
    )


def evaluate_simple(income: Any, cibil_score: Any) -> EligibilityResult:
    """
    Simple eligibility: annual income and credit score thresholds.

    Args:
        income: Annual income
        cibil_score: Credit score

    Returns:
        EligibilityResult with the fixed display range when eligible
    """
    is_eligible = (
        to_number(income) >= Eligibility.MIN_ANNUAL_INCOME
        and to_number(cibil_score) >= Eligibility.MIN_CIBIL_SCORE
    )
    if is_eligible:
        return EligibilityResult(
            is_eligible=True,
            max_eligible_amount=Eligibility.MAX_LOAN_AMOUNT,
            recommended_loan_type=LoanType.UNSECURED.value,
            estimated_range=Eligibility.SIMPLE_ELIGIBLE_RANGE,
            message=EligibilityMessages.SIMPLE_ELIGIBLE,
        )
    return EligibilityResult(
        is_eligible=False,
        max_eligible_amount=0,
        recommended_loan_type=LoanType.UNSECURED.value,
        estimated_range=Eligibility.SIMPLE_UNDETERMINED_RANGE,
        message=EligibilityMessages.SIMPLE_REVIEW,
    )
