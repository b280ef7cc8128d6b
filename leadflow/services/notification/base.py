"""Base email delivery types: provider enum, config dataclasses, message and transport ABC."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from leadflow.core.config.settings import LeadflowSettings


class EmailProvider(str, Enum):
    """Outbound email provider identifiers."""

    SECURE_SMTP = "gmail"
    RELAY_SMTP = "brevo-smtp"
    API_RELAY = "brevo-api"
    BRIDGE = "bridge"

    @property
    def is_http(self) -> bool:
        """True for providers reached over HTTPS instead of SMTP."""
        return self in (EmailProvider.API_RELAY, EmailProvider.BRIDGE)


def _mask(value: Optional[str]) -> str:
    return "'***'" if value else "None"


@dataclass
class SenderIdentity:
    """From name and address used by every transport."""

    name: str = "JV Overseas"
    address: str = ""

    def formatted(self) -> str:
        """RFC 5322 display form: "Name" <address>."""
        return f'"{self.name}" <{self.address}>' if self.name else self.address


@dataclass
class SMTPConfig:
    """SMTP transport configuration."""

    host: str
    port: int
    username: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = False
    start_tls: bool = False
    timeout: float = 15.0

    @property
    def configured(self) -> bool:
        """True when host and credentials are all present."""
        return bool(self.host and self.username and self.password)

    def __repr__(self) -> str:
        """Return repr with masked password."""
        return (
            f"SMTPConfig(host={self.host!r}, port={self.port}, username={self.username!r}, "
            f"password={_mask(self.password)}, use_tls={self.use_tls}, "
            f"start_tls={self.start_tls}, timeout={self.timeout})"
        )


@dataclass
class ApiRelayConfig:
    """HTTP API relay configuration."""

    api_key: Optional[str] = None
    url: str = "https://api.brevo.com/v3/smtp/email"
    timeout: float = 15.0

    @property
    def configured(self) -> bool:
        """True when an API key is present."""
        return bool(self.api_key and self.url)

    def __repr__(self) -> str:
        """Return repr with masked API key."""
        return (
            f"ApiRelayConfig(api_key={_mask(self.api_key)}, url={self.url!r}, "
            f"timeout={self.timeout})"
        )


@dataclass
class BridgeConfig:
    """HTTP bridge configuration."""

    url: Optional[str] = None
    token: Optional[str] = None
    timeout: float = 15.0

    @property
    def configured(self) -> bool:
        """True when the bridge URL is present."""
        return bool(self.url)

    def __repr__(self) -> str:
        """Return repr with masked token."""
        return f"BridgeConfig(url={self.url!r}, token={_mask(self.token)}, timeout={self.timeout})"


@dataclass
class EmailDeliveryConfig:
    """Email delivery configuration for all providers."""

    provider: EmailProvider = EmailProvider.SECURE_SMTP
    sender: SenderIdentity = field(default_factory=SenderIdentity)
    secure_smtp: SMTPConfig = field(
        default_factory=lambda: SMTPConfig(host="smtp.gmail.com", port=465, use_tls=True)
    )
    relay_smtp: SMTPConfig = field(
        default_factory=lambda: SMTPConfig(host="smtp-relay.brevo.com", port=587, start_tls=True)
    )
    api_relay: ApiRelayConfig = field(default_factory=ApiRelayConfig)
    bridge: BridgeConfig = field(default_factory=BridgeConfig)

    def __repr__(self) -> str:
        """Return repr with masked sensitive fields in nested configs."""
        return (
            f"EmailDeliveryConfig(provider={self.provider.value!r}, sender={self.sender!r}, "
            f"secure_smtp={self.secure_smtp!r}, relay_smtp={self.relay_smtp!r}, "
            f"api_relay={self.api_relay!r}, bridge={self.bridge!r})"
        )

    @classmethod
    def from_settings(cls, settings: "LeadflowSettings") -> "EmailDeliveryConfig":
        """
        Build delivery configuration from application settings.

        Args:
            settings: Application settings

        Returns:
            EmailDeliveryConfig instance
        """
        timeout = settings.email_timeout_seconds
        return cls(
            provider=EmailProvider(settings.email_provider),
            sender=SenderIdentity(
                name=settings.email_from_name, address=settings.email_from_address
            ),
            secure_smtp=SMTPConfig(
                host=settings.smtp_secure_host,
                port=settings.smtp_secure_port,
                username=settings.email_user or None,
                password=settings.email_pass.get_secret_value() or None,
                use_tls=True,
                timeout=timeout,
            ),
            relay_smtp=SMTPConfig(
                host=settings.smtp_relay_host,
                port=settings.smtp_relay_port,
                username=settings.brevo_smtp_user or None,
                password=settings.brevo_smtp_pass.get_secret_value() or None,
                start_tls=True,
                timeout=timeout,
            ),
            api_relay=ApiRelayConfig(
                api_key=settings.brevo_api_key.get_secret_value() or None,
                url=settings.brevo_api_url,
                timeout=timeout,
            ),
            bridge=BridgeConfig(
                url=settings.email_bridge_url or None,
                token=settings.email_bridge_token.get_secret_value() or None,
                timeout=timeout,
            ),
        )


@dataclass
class InlineImage:
    """Image embedded in the HTML body and referenced by cid."""

    filename: str
    content: bytes
    cid: str
    mime_type: str = "image/png"


@dataclass
class EmailMessage:
    """One HTML message to a single recipient."""

    to: str
    subject: str
    html: str
    inline_images: List[InlineImage] = field(default_factory=list)
    # Body with a text heading, for transports that cannot embed cid images
    text_html: Optional[str] = None

    def without_inline_images(self) -> "EmailMessage":
        """Copy of this message with the images dropped and the text-heading body."""
        return EmailMessage(to=self.to, subject=self.subject, html=self.text_html or self.html)


@dataclass
class DeliveryReceipt:
    """Successful delivery through one provider."""

    provider: str
    recipient: str
    message_id: Optional[str] = None
    accepted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "recipient": self.recipient,
            "message_id": self.message_id,
            "accepted_at": self.accepted_at.isoformat(),
        }


@dataclass
class DeliveryAttempt:
    """Outcome of one send attempt, recorded for operational visibility."""

    provider: str
    recipient: str
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "recipient": self.recipient,
            "success": self.success,
            "message_id": self.message_id,
            "error": self.error,
            "timestamp": self.timestamp.isoformat(),
        }


class EmailTransport(ABC):
    """Abstract base class for outbound email transports."""

    def __init__(self, provider: EmailProvider, sender: SenderIdentity):
        self._provider = provider
        self._sender = sender
        self._verified = False

    @property
    def name(self) -> str:
        """Provider identifier."""
        return self._provider.value

    @property
    def provider(self) -> EmailProvider:
        return self._provider

    @property
    def is_http(self) -> bool:
        """True for transports reached over HTTPS."""
        return self._provider.is_http

    @property
    def supports_verify(self) -> bool:
        """Whether verify() performs a real handshake."""
        return False

    @property
    def verified(self) -> bool:
        """True once a verify() handshake has succeeded."""
        return self._verified

    async def verify(self) -> bool:
        """
        Check connectivity and credentials.

        Returns:
            True if the transport is ready
        """
        return self._verified

    @abstractmethod
    async def send(self, message: EmailMessage) -> DeliveryReceipt:
        """
        Deliver one message.

        Args:
            message: Message to deliver

        Returns:
            DeliveryReceipt

        Raises:
            EmailTransportError: If the provider rejects or cannot be reached
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
