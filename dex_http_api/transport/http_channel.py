"""
============================================================================
Lisk DEX HTTP API v1.0.0
HTTP Bus Channel - Remote Module Bridge
============================================================================

Reliability Level: L6 Critical
Input Constraints: Reachable bus bridge URL
Side Effects: HTTP calls to the bus bridge

WIRE FORMAT:
    POST {bus_url}/invoke   {"procedure": "lisk_dex:getBids", "data": {...}}
        200 -> {"result": <any>}
        any -> {"error": {"name": "InvalidQueryError", "message": "..."}}

    POST {bus_url}/publish  {"event": "lisk_dex_http_api:bootstrap", "data": {...}}

NO RETRIES:
    Exactly one attempt per invocation. Timeouts are the transport's
    (httpx) responsibility; a timed-out call is a plain BusInvocationError.

Python 3.8 Compatible - No union type hints (X | None)
============================================================================
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional, Set

import httpx

from dex_http_api.transport.channel import (
    BusInvocationError,
    Channel,
    CommandId,
    SourceError,
)

# Configure module logger
logger = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_BUS_URL = "http://127.0.0.1:7010"
DEFAULT_TIMEOUT_SECONDS = 30.0

INVOKE_PATH = "/invoke"
PUBLISH_PATH = "/publish"


class HttpChannel(Channel):
    """
    Bus channel backed by an httpx AsyncClient.

    Reliability Level: L6 Critical
    Input Constraints: bus_url without trailing path
    Side Effects: HTTP POST per invocation

    USAGE:
        channel = HttpChannel("http://dex-node:7010")
        market = await channel.invoke(CommandId("lisk_dex", "getMarket"), {})
        await channel.close()
    """

    def __init__(
        self,
        bus_url: str = DEFAULT_BUS_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self._bus_url = bus_url.rstrip("/")
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._pending_publishes: Set["asyncio.Task[None]"] = set()

        logger.info(
            f"[BUS-HTTP-INIT] bus_url={self._bus_url} timeout={timeout}s"
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._bus_url,
                timeout=self._timeout
            )
        return self._client

    async def invoke(self, command: CommandId, payload: Optional[Dict[str, Any]] = None) -> Any:
        """
        Invoke a remote module action.

        Reliability Level: L6 Critical
        Side Effects: One HTTP POST, no retries

        Raises:
            BusInvocationError: Transport failure, malformed reply or module error
        """
        body = {"procedure": str(command), "data": payload if payload is not None else {}}
        start_time = time.time()

        try:
            response = await self._get_client().post(
                f"{self._bus_url}{INVOKE_PATH}",
                json=body
            )
        except httpx.TimeoutException as e:
            raise BusInvocationError(
                f"Timed out invoking {command}", command=command
            ) from e
        except httpx.HTTPError as e:
            raise BusInvocationError(
                f"Transport failure invoking {command}: {str(e)[:100]}",
                command=command
            ) from e

        latency_ms = (time.time() - start_time) * 1000

        try:
            reply = response.json()
        except ValueError as e:
            raise BusInvocationError(
                f"Non-JSON reply from bus for {command} (status {response.status_code})",
                command=command
            ) from e

        if isinstance(reply, dict) and reply.get("error") is not None:
            raw_error = reply["error"]
            if isinstance(raw_error, dict):
                source_error = SourceError(
                    name=str(raw_error.get("name") or "Error"),
                    message=str(raw_error.get("message") or "")
                )
            else:
                source_error = SourceError(name="Error", message=str(raw_error))
            raise BusInvocationError(
                f"Action {command} failed",
                command=command,
                source_error=source_error
            )

        if response.status_code != 200 or not isinstance(reply, dict) or "result" not in reply:
            raise BusInvocationError(
                f"Unexpected reply from bus for {command} (status {response.status_code})",
                command=command
            )

        logger.debug(
            f"[BUS-HTTP] {command} | status={response.status_code} | "
            f"latency={latency_ms:.1f}ms"
        )
        return reply["result"]

    def publish(self, command: CommandId, payload: Optional[Dict[str, Any]] = None) -> None:
        """Schedule an event publish on the running loop. Never raises."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"[BUS-HTTP] No running loop, dropping event {command}")
            return

        task = loop.create_task(self._send_event(command, payload))
        self._pending_publishes.add(task)
        task.add_done_callback(self._pending_publishes.discard)

    async def _send_event(self, command: CommandId, payload: Optional[Dict[str, Any]]) -> None:
        body = {"event": str(command), "data": payload if payload is not None else {}}
        try:
            response = await self._get_client().post(
                f"{self._bus_url}{PUBLISH_PATH}",
                json=body
            )
            if response.status_code >= 400:
                logger.warning(
                    f"[BUS-HTTP] Event rejected by bus | event={command} | "
                    f"status={response.status_code}"
                )
        except httpx.HTTPError as e:
            logger.warning(
                f"[BUS-HTTP] Failed to publish event | event={command} | error={e}"
            )

    async def close(self) -> None:
        if self._pending_publishes:
            await asyncio.gather(*self._pending_publishes, return_exceptions=True)
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


__all__ = [
    "DEFAULT_BUS_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "HttpChannel",
]
