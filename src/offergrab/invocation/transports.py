"""Function transports: the managed primary channel and the HTTP fallback.

The primary channel is whatever the backend-as-a-service client offers for
calling functions; it is injected and only needs to satisfy
``FunctionsChannel``. The fallback posts straight to the functions endpoint
over ``httpx`` so that calls still go through when the managed client fails
to reach the backend (custom domains, interfering browser extensions, proxy
quirks).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import json
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable
from urllib.parse import quote

import httpx

from offergrab.constants import DEFAULT_FUNCTIONS_BASE_URL, NETWORK_TIMEOUT
from offergrab.core.types import ErrorInfo, ErrorKind, Failure, Success

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from offergrab.config import FrozenConfig
    from offergrab.core.types import JSON, InvocationResult

logger = logging.getLogger(__name__)


@runtime_checkable
class FunctionsChannel(Protocol):
    """Primary transport: a managed "invoke function" call.

    Implementations return the decoded response payload and raise on failure.
    Raising ``offergrab.exceptions.TransportError`` with a ``kind`` lets the
    invoker classify the failure without reading the message.
    """

    async def invoke(self, name: str, body: JSON) -> Any: ...  # noqa: D102


class HttpFallbackTransport:
    """Direct ``POST {base_url}/{name}`` call used as the secondary transport.

    The response body is read as text before anything else so that diagnostic
    payloads survive non-success statuses. Connection-level failures raise
    ``httpx`` exceptions; the invoker folds them into its ``Failure``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_FUNCTIONS_BASE_URL,
        publishable_key: str | None = None,
        *,
        timeout: float = NETWORK_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Functions base URL; the function name is appended.
            publishable_key: Sent as ``apikey`` and as the bearer token.
            timeout: Request timeout when the transport owns its client.
            client: Optional shared client. It is never closed here.
        """
        self.base_url = base_url.rstrip("/")
        self._publishable_key = publishable_key
        self._timeout = timeout
        self._client = client

    @classmethod
    def from_config(
        cls, config: FrozenConfig, *, client: httpx.AsyncClient | None = None
    ) -> HttpFallbackTransport:
        """Build a transport from frozen configuration."""
        return cls(
            config.functions_base_url,
            config.publishable_key,
            timeout=config.request_timeout,
            client=client,
        )

    def url_for(self, name: str) -> str:
        """Return the endpoint URL for a function name."""
        return f"{self.base_url}/{quote(name, safe='')}"

    def headers(self) -> dict[str, str]:
        """Return the fixed request headers."""
        headers = {"Content-Type": "application/json"}
        if self._publishable_key:
            headers["apikey"] = self._publishable_key
            headers["Authorization"] = f"Bearer {self._publishable_key}"
        return headers

    async def invoke(self, name: str, body: JSON = None) -> InvocationResult:
        """Post the call and convert the HTTP response into a result.

        Raises:
            httpx.HTTPError: When no response could be obtained.
            json.JSONDecodeError: When a success response is not valid JSON.
        """
        payload = json.dumps(body if body is not None else {})
        async with self._http_client() as client:
            response = await client.post(
                self.url_for(name), content=payload, headers=self.headers()
            )
            text = response.text

        if not response.is_success:
            details = text.strip()
            message = f"Edge Function error ({response.status_code})"
            if details:
                message = f"{message}: {details}"
            logger.debug("Fallback call to %s failed: %s", name, message)
            return Failure(
                ErrorInfo(
                    message=message,
                    http_status=response.status_code,
                    kind=ErrorKind.HTTP,
                )
            )

        return Success(json.loads(text) if text else {})

    @asynccontextmanager
    async def _http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client
