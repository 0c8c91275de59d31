"""Alertmanager client for posting alerts"""
import asyncio
import time
from typing import Optional

import httpx

from alert_trigger.config.settings import get_settings
from alert_trigger.utils.error_handling import RejectedError, TransportError
from alert_trigger.utils.structured_logging import StructuredLogger


logger = StructuredLogger(__name__)

ALERTS_PATH = "/api/v2/alerts"


def prepare_alertmanager_url(address: str, use_tls: bool) -> str:
    """Build the alerts endpoint URL for ``address`` (no escaping)."""
    scheme = "https" if use_tls else "http"
    return f"{scheme}://{address}{ALERTS_PATH}"


class AlertmanagerClient:
    """Async client for the Alertmanager v2 HTTP API, single attempt, no retries

    ``timeout`` bounds the whole exchange (connect, request, response
    headers and failure body), not each socket operation.
    """

    def __init__(
        self,
        address: str,
        use_tls: bool = False,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = prepare_alertmanager_url(address, use_tls)
        self.timeout = timeout if timeout is not None else get_settings().request_timeout_seconds
        self.client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def send(self, body: str) -> None:
        """POST a rendered alert body within the total timeout

        Args:
            body: JSON text produced by the request builder

        Raises:
            TransportError: Connection, timeout, DNS failure or deadline exceeded
            RejectedError: Any status other than 200
        """
        try:
            await asyncio.wait_for(self._post(body), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            error = TransportError(
                f"Failed to create alert: request timed out after {self.timeout}s",
                url=self.url,
                cause=e,
            )
            logger.debug("Alertmanager request timed out", {"url": self.url, "timeout_s": self.timeout})
            raise error from e

    async def _post(self, body: str) -> None:
        start = time.time()
        try:
            request = self.client.build_request(
                "POST",
                self.url,
                content=body.encode("utf-8"),
                headers={"Content-Type": "application/json"},
            )
            response = await self.client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = TransportError(f"Failed to create alert: {e}", url=self.url, cause=e)
            logger.debug("Alertmanager request failed", {"url": self.url, "category": error.category})
            raise error from e

        try:
            latency_ms = int((time.time() - start) * 1000)
            if response.status_code != httpx.codes.OK:
                try:
                    await response.aread()
                    detail = response.text
                except httpx.HTTPError as e:
                    detail = str(e)
                logger.debug(
                    "Alertmanager rejected alert",
                    {"url": self.url, "status": response.status_code, "latency_ms": latency_ms},
                )
                raise RejectedError(response.status_code, response.reason_phrase, detail, url=self.url)

            logger.debug("Alert created", {"url": self.url, "latency_ms": latency_ms})
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


def send_alert(
    address: str,
    use_tls: bool,
    body: str,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """Send ``body`` once and release the connection.

    Ctrl-C at any point of the exchange, including while a failure body
    is being read, is reported as a TransportError.

    Raises:
        TransportError: Connection, timeout, DNS failure or interruption
        RejectedError: Any status other than 200
    """

    async def _deliver() -> None:
        async with AlertmanagerClient(address, use_tls=use_tls, timeout=timeout, transport=transport) as client:
            await client.send(body)

    try:
        asyncio.run(_deliver())
    except KeyboardInterrupt as e:
        raise TransportError(
            "Failed to create alert: request cancelled",
            url=prepare_alertmanager_url(address, use_tls),
            cause=e,
        ) from e
