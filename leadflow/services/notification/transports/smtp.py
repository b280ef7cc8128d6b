"""SMTP email transport (implicit TLS or STARTTLS)."""

import asyncio
from email.mime.image import MIMEImage
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid

import aiosmtplib
from loguru import logger

from leadflow.core.exceptions import EmailTransportError

from ..base import (
    DeliveryReceipt,
    EmailMessage,
    EmailProvider,
    EmailTransport,
    SenderIdentity,
    SMTPConfig,
)


def build_mime_message(message: EmailMessage, sender: SenderIdentity) -> MIMEMultipart:
    """
    Build a multipart/related MIME message with inline images.

    Args:
        message: Message to encode
        sender: From identity

    Returns:
        MIME message ready for aiosmtplib
    """
    mime = MIMEMultipart("related")
    mime["From"] = sender.formatted()
    mime["To"] = message.to
    mime["Subject"] = message.subject
    domain = sender.address.split("@")[-1] if "@" in sender.address else None
    mime["Message-ID"] = make_msgid(domain=domain)
    mime.attach(MIMEText(message.html, "html", "utf-8"))

    for image in message.inline_images:
        subtype = image.mime_type.split("/")[-1]
        part = MIMEImage(image.content, _subtype=subtype)
        part.add_header("Content-ID", f"<{image.cid}>")
        part.add_header("Content-Disposition", "inline", filename=image.filename)
        mime.attach(part)

    return mime


class SMTPTransport(EmailTransport):
    """Email transport over SMTP via aiosmtplib."""

    def __init__(self, provider: EmailProvider, config: SMTPConfig, sender: SenderIdentity):
        """
        Initialize SMTP transport.

        Args:
            provider: SECURE_SMTP (implicit TLS) or RELAY_SMTP (STARTTLS)
            config: SMTP configuration
            sender: From identity
        """
        super().__init__(provider, sender)
        self._config = config

    @property
    def supports_verify(self) -> bool:
        return True

    def _client(self) -> aiosmtplib.SMTP:
        return aiosmtplib.SMTP(
            hostname=self._config.host,
            port=self._config.port,
            username=self._config.username,
            password=self._config.password,
            use_tls=self._config.use_tls,
            start_tls=self._config.start_tls,
            timeout=self._config.timeout,
        )

    async def verify(self) -> bool:
        """
        Connect, authenticate and quit.

        Returns:
            True if the handshake succeeded
        """
        try:
            async with self._client():
                pass
        except (aiosmtplib.SMTPException, OSError, asyncio.TimeoutError) as e:
            self._verified = False
            logger.error(f"{self.name} connection failed: {e}")
            return False

        self._verified = True
        logger.info(f"{self.name} connected and ready")
        return True

    async def send(self, message: EmailMessage) -> DeliveryReceipt:
        """
        Deliver a message over SMTP.

        Args:
            message: Message to deliver

        Returns:
            DeliveryReceipt carrying the Message-ID header

        Raises:
            EmailTransportError: On SMTP, network or timeout failure
        """
        mime = build_mime_message(message, self._sender)
        try:
            async with self._client() as smtp:
                errors, _response = await smtp.send_message(mime)
        except (aiosmtplib.SMTPException, OSError, asyncio.TimeoutError) as e:
            raise EmailTransportError(self.name, str(e) or type(e).__name__) from e

        if errors:
            raise EmailTransportError(self.name, f"Recipient refused: {errors}")

        return DeliveryReceipt(
            provider=self.name, recipient=message.to, message_id=mime["Message-ID"]
        )
