"""Email transport selection with verification and single-step fallback."""

import asyncio
from collections import deque
from typing import TYPE_CHECKING, Deque, Dict, List, Optional

from loguru import logger

from leadflow.constants.email import EmailDelivery
from leadflow.core.exceptions import DeliveryError, EmailTransportError
from leadflow.utils.masking import mask_email

from .base import (
    DeliveryAttempt,
    DeliveryReceipt,
    EmailDeliveryConfig,
    EmailMessage,
    EmailProvider,
    EmailTransport,
    InlineImage,
)
from .transports import BrevoApiTransport, HttpBridgeTransport, SMTPTransport

if TYPE_CHECKING:
    from leadflow.core.config.settings import LeadflowSettings


class EmailTransportSelector:
    """
    Deliver HTML email through a configured primary transport with one fallback.

    Candidate order for every send:

    1. the primary transport, if its verify handshake has succeeded;
    2. the HTTP alternatives (API relay, then bridge);
    3. the primary transport, if it was never verified.

    At most two candidates are tried per message. HTTP transports receive the
    text-heading body and no inline images.
    """

    def __init__(
        self,
        primary: Optional[EmailTransport],
        alternatives: Optional[List[EmailTransport]] = None,
        max_attempts: int = EmailDelivery.MAX_ATTEMPTS,
        history_size: int = EmailDelivery.HISTORY_SIZE,
    ):
        """
        Initialize transport selector.

        Args:
            primary: Transport named by the provider setting (None if unconfigured)
            alternatives: Fallback transports in preference order
            max_attempts: Maximum transports tried per message
            history_size: Number of recent attempts retained
        """
        self._primary = primary
        self._alternatives = [t for t in (alternatives or []) if t is not primary]
        self._max_attempts = max_attempts
        self._history: Deque[DeliveryAttempt] = deque(maxlen=history_size)
        self._verify_tasks: Dict[str, asyncio.Task] = {}

    @classmethod
    def from_config(cls, config: EmailDeliveryConfig) -> "EmailTransportSelector":
        """
        Build transports for every configured provider.

        Providers missing credentials are skipped with a warning.

        Args:
            config: Email delivery configuration

        Returns:
            EmailTransportSelector instance
        """
        available: Dict[EmailProvider, EmailTransport] = {}

        if config.secure_smtp.configured:
            available[EmailProvider.SECURE_SMTP] = SMTPTransport(
                EmailProvider.SECURE_SMTP, config.secure_smtp, config.sender
            )
        if config.relay_smtp.configured:
            available[EmailProvider.RELAY_SMTP] = SMTPTransport(
                EmailProvider.RELAY_SMTP, config.relay_smtp, config.sender
            )
        if config.api_relay.configured:
            available[EmailProvider.API_RELAY] = BrevoApiTransport(config.api_relay, config.sender)
        if config.bridge.configured:
            available[EmailProvider.BRIDGE] = HttpBridgeTransport(config.bridge, config.sender)

        primary = available.get(config.provider)
        if primary is None:
            logger.warning(
                f"Email provider '{config.provider.value}' credentials missing; "
                "falling back to HTTP transports if configured"
            )

        alternatives = [
            available[p]
            for p in (EmailProvider.API_RELAY, EmailProvider.BRIDGE)
            if p in available and p is not config.provider
        ]

        if primary is None and not alternatives:
            logger.warning("No email transport configured; outbound email is disabled")
        else:
            names = [t.name for t in ([primary] if primary else []) + alternatives]
            logger.info(f"Email transports configured: {', '.join(names)}")

        return cls(primary=primary, alternatives=alternatives)

    @classmethod
    def from_settings(cls, settings: "LeadflowSettings") -> "EmailTransportSelector":
        """Build a selector from application settings."""
        return cls.from_config(EmailDeliveryConfig.from_settings(settings))

    @property
    def primary(self) -> Optional[EmailTransport]:
        return self._primary

    @property
    def transports(self) -> List[EmailTransport]:
        """All transports, primary first."""
        return ([self._primary] if self._primary else []) + self._alternatives

    @property
    def history(self) -> List[DeliveryAttempt]:
        """Recent delivery attempts, oldest first."""
        return list(self._history)

    async def initialize(self, wait: bool = False) -> Dict[str, Optional[bool]]:
        """
        Start verification of every transport that supports a handshake.

        Args:
            wait: Await the handshakes before returning

        Returns:
            Readiness per provider (None while verification is pending)
        """
        for transport in self.transports:
            if transport.supports_verify and transport.name not in self._verify_tasks:
                logger.info(f"Verifying email transport {transport.name}...")
                self._verify_tasks[transport.name] = asyncio.create_task(
                    transport.verify(), name=f"verify-{transport.name}"
                )

        if wait and self._verify_tasks:
            await asyncio.gather(*self._verify_tasks.values(), return_exceptions=True)

        return self.readiness()

    def readiness(self) -> Dict[str, Optional[bool]]:
        """
        Current readiness per provider.

        Returns:
            Mapping of provider name to True/False, or None while verifying
        """
        status: Dict[str, Optional[bool]] = {}
        for transport in self.transports:
            task = self._verify_tasks.get(transport.name)
            if task is not None and not task.done():
                status[transport.name] = None
            else:
                status[transport.name] = transport.verified
        return status

    def _candidates(self) -> List[EmailTransport]:
        ordered: List[EmailTransport] = []
        if self._primary is not None and self._primary.verified:
            ordered.append(self._primary)
        ordered.extend(self._alternatives)
        if self._primary is not None and not self._primary.verified:
            ordered.append(self._primary)

        unique: List[EmailTransport] = []
        for transport in ordered:
            if transport not in unique:
                unique.append(transport)
        return unique[: self._max_attempts]

    @staticmethod
    def _message_for(transport: EmailTransport, message: EmailMessage) -> EmailMessage:
        # HTTP relays cannot resolve cid references; they get the text heading
        if transport.is_http and message.inline_images:
            return message.without_inline_images()
        return message

    def _record(self, attempt: DeliveryAttempt) -> None:
        self._history.append(attempt)

    async def send(
        self,
        to: str,
        subject: str,
        html: str,
        inline_images: Optional[List[InlineImage]] = None,
        text_html: Optional[str] = None,
    ) -> DeliveryReceipt:
        """
        Deliver one HTML message, falling back once on failure.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body
            inline_images: Images referenced by cid in the body
            text_html: Body without cid references, used by HTTP transports

        Returns:
            DeliveryReceipt from the transport that accepted the message

        Raises:
            DeliveryError: If no transport is configured or every candidate failed
        """
        message = EmailMessage(
            to=to,
            subject=subject,
            html=html,
            inline_images=list(inline_images or []),
            text_html=text_html,
        )
        candidates = self._candidates()
        if not candidates:
            logger.error(f"No email transport available for {mask_email(to)}")
            raise DeliveryError("No email transport is configured")

        if self._primary is not None and candidates[0] is not self._primary:
            logger.info(
                f"{self._primary.name} is unverified, using {candidates[0].name} directly"
            )

        failures: List[str] = []
        for transport in candidates:
            logger.info(f"[{transport.name}] Sending email to {mask_email(to)}...")
            try:
                receipt = await transport.send(self._message_for(transport, message))
            except EmailTransportError as e:
                error = e.message
            except Exception as e:
                logger.exception(f"[{transport.name}] Unexpected transport failure")
                error = f"[{transport.name}] {type(e).__name__}: {e}"
            else:
                self._record(
                    DeliveryAttempt(
                        provider=transport.name,
                        recipient=to,
                        success=True,
                        message_id=receipt.message_id,
                    )
                )
                logger.info(f"[{transport.name}] Email sent: ID={receipt.message_id}")
                return receipt

            self._record(
                DeliveryAttempt(provider=transport.name, recipient=to, success=False, error=error)
            )
            failures.append(error)
            logger.warning(f"Email delivery via {transport.name} failed: {error}")

        logger.error(f"All email delivery methods failed for {mask_email(to)}")
        raise DeliveryError(attempts=failures)

    async def close(self) -> None:
        """Cancel pending verifications and release transport resources."""
        for task in self._verify_tasks.values():
            if not task.done():
                task.cancel()
        if self._verify_tasks:
            await asyncio.gather(*self._verify_tasks.values(), return_exceptions=True)
        self._verify_tasks.clear()
        for transport in self.transports:
            await transport.close()
