"""Email templates - separates HTML rendering from transport."""

import html
import re
from typing import Any, Mapping, Optional, Tuple

from leadflow.constants.email import NEXT_STEPS, Brand, Subjects

_CAPITAL = re.compile(r"([A-Z])")


def humanize_key(key: str) -> str:
    """
    Turn a camelCase key into a label.

    Example: preferredCountry -> Preferred Country

    Args:
        key: Detail key

    Returns:
        Label with a space before each internal capital and the first letter capitalized
    """
    if not key:
        return ""
    return key[0].upper() + _CAPITAL.sub(r" \1", key[1:])


def _e(value: Any) -> str:
    return html.escape(str(value))


def _brand_block(logo_available: bool) -> str:
    if logo_available:
        return (
            f'<img src="cid:{Brand.LOGO_CID}" alt="{Brand.NAME}" style="max-height: 60px;">'
        )
    return f"<h2>{Brand.NAME}</h2>"


def _footer(include_website: bool = False) -> str:
    website = ""
    if include_website:
        website = (
            f'<br>🌐 <a href="{Brand.WEBSITE}" style="color: #0066cc;">'
            f"{Brand.WEBSITE_LABEL}</a>"
        )
    return f"""
            <hr style="margin-top: 30px; border: none; border-top: 1px solid #eee;">
            <p style="font-size: 12px; color: #666; text-align: center;">
                {Brand.LEGAL_NAME} | {Brand.ADDRESS}<br>
                📞 {Brand.PHONE} | ✉️ {Brand.EMAIL}{website}
            </p>"""


def _wrap(body: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: auto; '
        f'padding: 20px;">{body}\n        </div>'
    )


class EmailTemplates:
    """Static HTML templates for each outbound email type."""

    @staticmethod
    def eligibility_result(
        name: str, is_eligible: bool, estimated_range: str, logo_available: bool = False
    ) -> Tuple[str, str]:
        """
        Template for an eligibility check result.

        Args:
            name: Applicant name
            is_eligible: Eligibility outcome
            estimated_range: Display range shown when eligible
            logo_available: Reference the inline logo instead of a text heading

        Returns:
            (subject, html)
        """
        if is_eligible:
            outcome = f'<b style="color: #28a745;">✓ Eligible:</b> {_e(estimated_range)}'
        else:
            outcome = "<b>We need more details to confirm your eligibility.</b>"

        body = f"""
            <div style="text-align: center;">
                {_brand_block(logo_available)}
            </div>
            <h2>Hello {_e(name)},</h2>
            <p>Your loan eligibility check is complete.</p>
            <div style="background: #f0f7ff; padding: 15px; border-radius: 8px; margin: 20px 0;">
                {outcome}
            </div>
            <p>Our loan advisors will contact you shortly to discuss the next steps.</p>
            <p style="margin-top: 30px;">Best regards,<br><b>Team {Brand.NAME}</b></p>{_footer()}"""
        return Subjects.ELIGIBILITY, _wrap(body)

    @staticmethod
    def enquiry_confirmation(
        name: str,
        enquiry_type: str,
        details: Optional[Mapping[str, Any]] = None,
        logo_available: bool = False,
    ) -> Tuple[str, str]:
        """
        Template for an enquiry confirmation.

        Falsy detail values are skipped; the details block is omitted when empty.

        Args:
            name: Applicant name
            enquiry_type: Service the enquiry is about
            details: Arbitrary key -> value mapping shown as a list
            logo_available: Reference the inline logo instead of a text heading

        Returns:
            (subject, html)
        """
        rows = "".join(
            f'<p style="margin: 5px 0;"><b>{_e(humanize_key(key))}:</b> {_e(value)}</p>'
            for key, value in (details or {}).items()
            if value
        )
        details_block = ""
        if rows:
            details_block = f"""
            <div style="background: #f8f9fa; padding: 15px; border-radius: 8px; margin: 20px 0;">
                <h3 style="margin-top: 0; color: #495057;">Your Enquiry Details:</h3>
                {rows}
            </div>"""

        steps = "".join(f"<li>{_e(step)}</li>" for step in NEXT_STEPS)

        body = f"""
            <div style="text-align: center; margin-bottom: 20px;">
                {_brand_block(logo_available)}
            </div>
            <h2 style="color: #2c3e50;">Enquiry Received Successfully!</h2>
            <p>Dear <b>{_e(name)}</b>,</p>
            <p>Thank you for reaching out to {Brand.NAME}. We have received your enquiry regarding <b>{_e(enquiry_type)}</b>.</p>{details_block}
            <p>Our expert counselors will review your profile and contact you within <b>24 hours</b> to discuss the best options for your study abroad journey.</p>
            <div style="background: #e7f3ff; padding: 15px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #0066cc;">
                <p style="margin: 0;"><b>What's Next?</b></p>
                <ul style="margin: 10px 0; padding-left: 20px;">{steps}</ul>
            </div>
            <p>If you have any urgent questions, feel free to call us at <b>{Brand.PHONE}</b>.</p>
            <p style="margin-top: 30px;">Warm regards,<br><b>Team {Brand.NAME}</b><br><i>Your Study Abroad Partner</i></p>{_footer(include_website=True)}"""
        return Subjects.ENQUIRY.format(enquiry_type=enquiry_type), _wrap(body)

    @staticmethod
    def admin_otp(otp: str, valid_minutes: int = 5) -> Tuple[str, str]:
        """Template for the admin login OTP."""
        body = (
            f"<p>Your OTP for admin login is: <b>{_e(otp)}</b></p>"
            f"<p>It expires in {valid_minutes} minutes.</p>"
        )
        return Subjects.ADMIN_OTP, body
