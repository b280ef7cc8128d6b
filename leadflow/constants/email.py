"""Email branding, contact details and provider endpoints."""

from typing import Final, List


class Brand:
    """Brand block and closing boilerplate used in every email."""

    NAME: Final[str] = "JV Overseas"
    LOGO_CID: Final[str] = "jv-logo"
    PRIMARY_COLOR: Final[str] = "#1e3a8a"
    PHONE: Final[str] = "+91 8712275590"
    EMAIL: Final[str] = "jvoverseaspvtltd@gmail.com"
    ADDRESS: Final[str] = "Medara Bazar, Chilakaluripet, AP"
    WEBSITE: Final[str] = "https://jvoverseas.com"
    WEBSITE_LABEL: Final[str] = "www.jvoverseas.com"
    LEGAL_NAME: Final[str] = "JV Overseas Pvt. Ltd."


NEXT_STEPS: Final[List[str]] = [
    "Profile evaluation by our experts",
    "Personalized university recommendations",
    "Guidance on application process",
    "Scholarship and loan assistance",
]


class Subjects:
    """Email subject lines."""

    ELIGIBILITY: Final[str] = "Loan Eligibility Check - JV Overseas"
    ENQUIRY: Final[str] = "Enquiry Confirmation - {enquiry_type}"
    ADMIN_OTP: Final[str] = "Your Admin Login OTP"


class EmailDelivery:
    """Transport selection limits."""

    MAX_ATTEMPTS: Final[int] = 2
    HISTORY_SIZE: Final[int] = 200
