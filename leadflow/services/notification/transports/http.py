"""Shared aiohttp plumbing for HTTP-based email transports."""

import asyncio
from typing import Any, Dict

import aiohttp

from leadflow.core.exceptions import EmailTransportError

from ..base import EmailProvider, EmailTransport, SenderIdentity


class HttpJsonTransport(EmailTransport):
    """Base class for transports that POST a JSON document over HTTPS."""

    def __init__(self, provider: EmailProvider, sender: SenderIdentity, timeout: float):
        super().__init__(provider, sender)
        self._timeout = timeout
        # No handshake exists for HTTP relays; reachability is proven per send
        self._verified = True

    async def _post_json(
        self, url: str, payload: Dict[str, Any], headers: Dict[str, str]
    ) -> Dict[str, Any]:
        """
        POST a JSON payload and return the decoded response body.

        Args:
            url: Endpoint URL
            payload: JSON body
            headers: Extra request headers

        Returns:
            Decoded JSON response (empty dict for an empty or non-JSON body)

        Raises:
            EmailTransportError: On non-2xx status, client error or timeout
        """
        timeout = aiohttp.ClientTimeout(total=self._timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=payload, headers=headers) as response:
                    if response.status >= 300:
                        body = await response.text()
                        raise EmailTransportError(
                            self.name, f"HTTP {response.status}: {body[:200]}"
                        )
                    try:
                        data = await response.json(content_type=None)
                    except ValueError:
                        data = None
        except aiohttp.ClientError as e:
            raise EmailTransportError(self.name, f"HTTP client error: {e}") from e
        except asyncio.TimeoutError as e:
            raise EmailTransportError(self.name, f"Timed out after {self._timeout}s") from e

        return data if isinstance(data, dict) else {}
