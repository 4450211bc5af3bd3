"""Resilient backend function invocation.

Implements a small, explicit execution flow:

- Call the primary (managed) channel
- Classify a failure; terminal failures are returned as they are
- Network-classified failures get a single attempt over the HTTP fallback
- Every outcome is a ``Success`` or ``Failure``; nothing is raised

There are no retries beyond the one fallback, no backoff, and no timeout of
its own; deadlines come from the transports or from the caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from offergrab.config import FrozenConfig
from offergrab.core.types import ErrorInfo, ErrorKind, Failure, Success
from offergrab.telemetry import TelemetryContext

from .classification import classify_error, error_status
from .transports import HttpFallbackTransport

if TYPE_CHECKING:
    import httpx

    from offergrab.core.types import JSON, InvocationResult
    from offergrab.telemetry import TelemetryContextProtocol

    from .transports import FunctionsChannel

logger = logging.getLogger(__name__)

# --- Telemetry scopes ---
T_INVOKE_PRIMARY = "invoke.primary"
T_INVOKE_FALLBACK = "invoke.fallback"
T_FALLBACK_USED = "invoke.fallback_used"


class Invoker:
    """Calls backend functions with a single HTTP fallback on network failure.

    With ``channel=None`` every call goes straight to the HTTP transport,
    which is how clients on custom domains avoid the managed client entirely.
    """

    def __init__(
        self,
        channel: FunctionsChannel | None = None,
        fallback: HttpFallbackTransport | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        """Initialize with an optional primary channel and fallback transport."""
        self._channel = channel
        self._fallback = fallback or HttpFallbackTransport.from_config(FrozenConfig())
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    @classmethod
    def from_config(
        cls,
        config: FrozenConfig,
        *,
        channel: FunctionsChannel | None = None,
        client: httpx.AsyncClient | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> Invoker:
        """Build an invoker whose fallback follows the frozen configuration."""
        return cls(
            channel,
            HttpFallbackTransport.from_config(config, client=client),
            telemetry,
        )

    async def invoke(self, name: str, body: JSON = None) -> InvocationResult:
        """Invoke backend function ``name`` with a JSON ``body``.

        Returns:
            ``Success`` with the decoded payload, or ``Failure`` with an
            ``ErrorInfo``. Exactly one result per call.
        """
        if self._channel is None:
            return await self._invoke_direct(name, body)

        try:
            with self._telemetry(T_INVOKE_PRIMARY, function=name):
                data = await self._channel.invoke(name, body)
        except Exception as primary_error:
            return await self._handle_primary_error(name, body, primary_error)
        return Success(data)

    async def _handle_primary_error(
        self, name: str, body: JSON, primary_error: Exception
    ) -> InvocationResult:
        kind = classify_error(primary_error)
        if kind is not ErrorKind.NETWORK:
            logger.warning("Function %s failed (%s): %s", name, kind.value, primary_error)
            return Failure(
                ErrorInfo(
                    message=_describe(primary_error),
                    http_status=error_status(primary_error),
                    kind=kind,
                )
            )

        logger.info(
            "Function %s unreachable via primary channel, using HTTP fallback: %s",
            name,
            primary_error,
        )
        self._telemetry.count(T_FALLBACK_USED, function=name)
        try:
            with self._telemetry(T_INVOKE_FALLBACK, function=name):
                return await self._fallback.invoke(name, body)
        except Exception as fallback_error:
            logger.warning(
                "Fallback for %s failed after primary error: %s; fallback error: %s",
                name,
                primary_error,
                fallback_error,
            )
            return Failure(
                ErrorInfo(
                    message=(
                        f"{_describe(primary_error)}; fallback error: "
                        f"{_describe(fallback_error)}"
                    ),
                    kind=ErrorKind.NETWORK,
                )
            )

    async def _invoke_direct(self, name: str, body: JSON) -> InvocationResult:
        try:
            with self._telemetry(T_INVOKE_FALLBACK, function=name):
                return await self._fallback.invoke(name, body)
        except Exception as e:
            logger.warning("Direct call to %s failed: %s", name, e)
            return Failure(
                ErrorInfo(message=_describe(e), kind=classify_error(e))
            )


def _describe(error: BaseException) -> str:
    # Some httpx errors stringify to an empty message
    return str(error) or type(error).__name__


async def invoke_function(
    name: str,
    body: JSON = None,
    *,
    channel: FunctionsChannel | None = None,
    config: FrozenConfig | None = None,
) -> InvocationResult:
    """Invoke a backend function with a one-off ``Invoker``.

    Args:
        name: Function identifier.
        body: JSON-serializable payload; ``None`` is sent as ``{}``.
        channel: Optional primary channel; without it the HTTP transport is
            used directly.
        config: Frozen configuration; library defaults when omitted.
    """
    invoker = Invoker.from_config(config or FrozenConfig(), channel=channel)
    return await invoker.invoke(name, body)
