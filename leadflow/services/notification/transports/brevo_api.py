"""HTTP API relay transport (Brevo transactional email API)."""

from ..base import ApiRelayConfig, DeliveryReceipt, EmailMessage, EmailProvider, SenderIdentity
from .http import HttpJsonTransport


class BrevoApiTransport(HttpJsonTransport):
    """Email transport over the Brevo v3 transactional API."""

    def __init__(self, config: ApiRelayConfig, sender: SenderIdentity):
        super().__init__(EmailProvider.API_RELAY, sender, config.timeout)
        self._config = config

    async def send(self, message: EmailMessage) -> DeliveryReceipt:
        """
        Deliver a message through the API relay.

        Args:
            message: Message to deliver

        Returns:
            DeliveryReceipt carrying the relay's messageId

        Raises:
            EmailTransportError: On non-2xx status, client error or timeout
        """
        payload = {
            "sender": {"name": self._sender.name, "email": self._sender.address},
            "to": [{"email": message.to}],
            "subject": message.subject,
            "htmlContent": message.html,
        }

        headers = {
            "api-key": self._config.api_key or "",
            "accept": "application/json",
            "content-type": "application/json",
        }
        data = await self._post_json(self._config.url, payload, headers)
        return DeliveryReceipt(
            provider=self.name, recipient=message.to, message_id=data.get("messageId")
        )
