"""Email notification package.

Re-exports the public surface so callers can write
``from leadflow.services.notification import NotificationService``.
"""

from .base import (
    ApiRelayConfig,
    BridgeConfig,
    DeliveryAttempt,
    DeliveryReceipt,
    EmailDeliveryConfig,
    EmailMessage,
    EmailProvider,
    EmailTransport,
    InlineImage,
    SenderIdentity,
    SMTPConfig,
)
from .dispatcher import BackgroundDispatcher
from .message_templates import EmailTemplates, humanize_key
from .service import NotificationService, load_inline_logo
from .transport_selector import EmailTransportSelector
from .transports import BrevoApiTransport, HttpBridgeTransport, SMTPTransport

__all__ = [
    "ApiRelayConfig",
    "BackgroundDispatcher",
    "BridgeConfig",
    "BrevoApiTransport",
    "DeliveryAttempt",
    "DeliveryReceipt",
    "EmailDeliveryConfig",
    "EmailMessage",
    "EmailProvider",
    "EmailTemplates",
    "EmailTransport",
    "EmailTransportSelector",
    "HttpBridgeTransport",
    "InlineImage",
    "NotificationService",
    "SMTPConfig",
    "SMTPTransport",
    "SenderIdentity",
    "humanize_key",
    "load_inline_logo",
]
