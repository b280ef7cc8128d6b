"""Email transport implementations."""

from .bridge import HttpBridgeTransport
from .brevo_api import BrevoApiTransport
from .http import HttpJsonTransport
from .smtp import SMTPTransport, build_mime_message

__all__ = [
    "BrevoApiTransport",
    "HttpBridgeTransport",
    "HttpJsonTransport",
    "SMTPTransport",
    "build_mime_message",
]
