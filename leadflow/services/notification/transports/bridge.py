"""HTTP bridge transport: hands the message to a relay service over HTTPS."""

from typing import Dict

from ..base import BridgeConfig, DeliveryReceipt, EmailMessage, EmailProvider, SenderIdentity
from .http import HttpJsonTransport


class HttpBridgeTransport(HttpJsonTransport):
    """Email transport that POSTs to a self-hosted HTTP bridge."""

    def __init__(self, config: BridgeConfig, sender: SenderIdentity):
        super().__init__(EmailProvider.BRIDGE, sender, config.timeout)
        self._config = config

    async def send(self, message: EmailMessage) -> DeliveryReceipt:
        """
        Deliver a message through the bridge.

        Raises:
            EmailTransportError: On non-2xx status, client error or timeout
        """
        payload = {
            "to": message.to,
            "subject": message.subject,
            "html": message.html,
            "fromName": self._sender.name,
            "fromAddress": self._sender.address,
        }
        headers: Dict[str, str] = {"content-type": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"

        data = await self._post_json(self._config.url or "", payload, headers)
        return DeliveryReceipt(
            provider=self.name,
            recipient=message.to,
            message_id=data.get("messageId") or data.get("id"),
        )
