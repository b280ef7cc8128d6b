"""Constants for Leadflow.

All classes and constants can be imported directly from this package:
    from leadflow.constants import OTP, Eligibility, SUGGESTED_BANKS
"""

# Email
from .email import NEXT_STEPS, Brand, EmailDelivery, Subjects

# Eligibility
from .eligibility import SUGGESTED_BANKS, Eligibility, EligibilityMessages

# OTP
from .otp import OTP

__all__ = [
    "Brand",
    "EmailDelivery",
    "NEXT_STEPS",
    "Subjects",
    "Eligibility",
    "EligibilityMessages",
    "SUGGESTED_BANKS",
    "OTP",
]
