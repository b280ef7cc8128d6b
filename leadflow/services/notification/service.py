"""NotificationService orchestrator - templated email over the transport selector."""

import asyncio
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Tuple

from loguru import logger

from leadflow.constants.email import Brand
from leadflow.constants.otp import OTP
from leadflow.utils.masking import mask_email

from .base import DeliveryReceipt, InlineImage
from .dispatcher import BackgroundDispatcher
from .message_templates import EmailTemplates
from .transport_selector import EmailTransportSelector

if TYPE_CHECKING:
    from leadflow.core.config.settings import LeadflowSettings


def load_inline_logo(path: Optional[str]) -> Optional[InlineImage]:
    """
    Load the brand logo for cid embedding.

    Args:
        path: Logo file path

    Returns:
        InlineImage, or None when the file does not exist
    """
    if not path:
        return None
    logo_file = Path(path)
    if not logo_file.is_file():
        logger.warning(f"Logo file not found at: {logo_file}; emails will be sent without logo")
        return None
    mime_type = mimetypes.guess_type(logo_file.name)[0] or f"image/{logo_file.suffix.lstrip('.')}"
    return InlineImage(
        filename=logo_file.name,
        content=logo_file.read_bytes(),
        cid=Brand.LOGO_CID,
        mime_type=mime_type,
    )


class NotificationService:
    """
    Applicant and admin email notifications.

    ``send_*`` methods await delivery and raise DeliveryError on exhaustion.
    ``notify_*`` methods hand the same work to the background dispatcher and
    return immediately; delivery failures end up in the logs only.
    """

    def __init__(
        self,
        selector: EmailTransportSelector,
        dispatcher: Optional[BackgroundDispatcher] = None,
        logo: Optional[InlineImage] = None,
    ):
        """
        Initialize notification service.

        Args:
            selector: Email transport selector
            dispatcher: Background dispatcher for fire-and-forget sends
            logo: Inline brand logo (text heading is used when None)
        """
        self.selector = selector
        self.dispatcher = dispatcher or BackgroundDispatcher()
        self._logo = logo
        logger.info(f"NotificationService initialized (logo: {logo is not None})")

    @classmethod
    def from_settings(cls, settings: "LeadflowSettings") -> "NotificationService":
        """Build the service, its selector and its dispatcher from settings."""
        return cls(
            selector=EmailTransportSelector.from_settings(settings),
            dispatcher=BackgroundDispatcher(max_pending=settings.notification_max_pending),
            logo=load_inline_logo(settings.email_logo_path),
        )

    @property
    def logo_available(self) -> bool:
        return self._logo is not None

    def _inline_images(self) -> List[InlineImage]:
        return [self._logo] if self._logo is not None else []

    async def _send_branded(
        self, email: str, render: Callable[[bool], Tuple[str, str]]
    ) -> DeliveryReceipt:
        """
        Render a branded template and send it.

        With a logo, the text-heading rendering is passed along for transports
        that cannot embed cid images.

        Args:
            email: Recipient address
            render: Template callable taking logo_available

        Returns:
            DeliveryReceipt
        """
        subject, html = render(self.logo_available)
        text_html = render(False)[1] if self.logo_available else None
        return await self.selector.send(
            email, subject, html, self._inline_images(), text_html=text_html
        )

    def get_stats(self) -> Dict[str, Any]:
        """
        Get notification statistics.

        Returns:
            Dictionary with transport readiness and background queue counters
        """
        return {
            "transports": self.selector.readiness(),
            "background": self.dispatcher.get_stats(),
        }

    async def send_email(self, to: str, subject: str, html: str) -> DeliveryReceipt:
        """
        Send a raw HTML email without branding.

        Raises:
            DeliveryError: If every transport failed
        """
        return await self.selector.send(to, subject, html)

    async def send_eligibility_result(
        self, email: str, name: str, is_eligible: bool, estimated_range: str
    ) -> DeliveryReceipt:
        """
        Send the eligibility result email.

        Args:
            email: Applicant email
            name: Applicant name
            is_eligible: Eligibility outcome
            estimated_range: Display range shown when eligible

        Returns:
            DeliveryReceipt

        Raises:
            DeliveryError: If every transport failed
        """
        return await self._send_branded(
            email,
            lambda logo: EmailTemplates.eligibility_result(
                name, is_eligible, estimated_range, logo_available=logo
            ),
        )

    async def send_enquiry_confirmation(
        self,
        email: str,
        name: str,
        enquiry_type: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> DeliveryReceipt:
        """
        Send the enquiry confirmation email.

        Args:
            email: Applicant email
            name: Applicant name
            enquiry_type: Service the enquiry is about
            details: Extra details listed in the email

        Returns:
            DeliveryReceipt

        Raises:
            DeliveryError: If every transport failed
        """
        return await self._send_branded(
            email,
            lambda logo: EmailTemplates.enquiry_confirmation(
                name, enquiry_type, details, logo_available=logo
            ),
        )

    async def send_admin_otp(self, email: str, otp: str) -> DeliveryReceipt:
        """Send the admin login OTP email."""
        subject, html = EmailTemplates.admin_otp(otp, OTP.TIMEOUT_SECONDS // 60)
        return await self.selector.send(email, subject, html)

    def notify_eligibility_result(
        self, email: str, name: str, is_eligible: bool, estimated_range: str
    ) -> Optional[asyncio.Task]:
        """Queue the eligibility result email without waiting for delivery."""
        return self.dispatcher.dispatch(
            self.send_eligibility_result(email, name, is_eligible, estimated_range),
            label=f"eligibility-email:{mask_email(email)}",
        )

    def notify_enquiry_confirmation(
        self,
        email: str,
        name: str,
        enquiry_type: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> Optional[asyncio.Task]:
        """Queue the enquiry confirmation email without waiting for delivery."""
        return self.dispatcher.dispatch(
            self.send_enquiry_confirmation(email, name, enquiry_type, details),
            label=f"enquiry-email:{mask_email(email)}",
        )

    def notify_admin_otp(self, email: str, otp: str) -> Optional[asyncio.Task]:
        """Queue the admin OTP email without waiting for delivery."""
        return self.dispatcher.dispatch(
            self.send_admin_otp(email, otp), label=f"otp-email:{mask_email(email)}"
        )

    async def close(self, timeout: float = 10.0) -> None:
        """Drain background sends and release transports."""
        await self.dispatcher.drain(timeout)
        await self.selector.close()
