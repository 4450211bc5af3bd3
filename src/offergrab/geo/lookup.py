"""Caller-country lookup through third-party IP geolocation services.

Each provider is a narrow ``CountryResolver``; ``GeoLocator`` tries them in
order and settles on the first valid two-letter code. Every provider failure
is absorbed, and when none answers the result is the ``"XX"`` sentinel, so a
lookup never raises.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import re
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from offergrab.constants import (
    CLOUDFLARE_TRACE_URL,
    GEO_TIMEOUT,
    IPAPI_URL,
    IPWHO_URL,
    UNKNOWN_COUNTRY,
)
from offergrab.exceptions import GeoLookupError
from offergrab.telemetry import TelemetryContext

from .access import normalize_country

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    from offergrab.config import FrozenConfig
    from offergrab.telemetry import TelemetryContextProtocol

logger = logging.getLogger(__name__)

_TRACE_LOC = re.compile(r"^loc=([A-Za-z]{2})\s*$", re.MULTILINE)


def valid_country_code(value: Any) -> str | None:
    """Return ``value`` as an upper-case two-letter code, or None."""
    if not isinstance(value, str):
        return None
    code = normalize_country(value)
    if len(code) == 2 and code.isalpha() and code != UNKNOWN_COUNTRY:
        return code
    return None


@runtime_checkable
class CountryResolver(Protocol):
    """Capability that resolves the caller's country code."""

    async def resolve_country(self, client: httpx.AsyncClient) -> str:
        """Return a valid two-letter code or raise ``GeoLookupError``."""
        ...


class _JSONCountryResolver:
    """Resolver for services answering with a JSON ``country_code`` field."""

    url: str
    name: str

    async def resolve_country(self, client: httpx.AsyncClient) -> str:
        response = await client.get(self.url)
        if not response.is_success:
            raise GeoLookupError(f"{self.name} returned HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise GeoLookupError(f"{self.name} returned malformed JSON") from e
        if not isinstance(data, dict) or data.get("success") is False:
            raise GeoLookupError(f"{self.name} returned no location")
        code = valid_country_code(data.get("country_code"))
        if code is None:
            raise GeoLookupError(f"{self.name} returned no country code")
        return code


class IpapiResolver(_JSONCountryResolver):
    """``GET https://ipapi.co/json/``."""

    name = "ipapi"

    def __init__(self, url: str = IPAPI_URL) -> None:
        self.url = url


class IpwhoResolver(_JSONCountryResolver):
    """``GET https://ipwho.is/``; no API key needed."""

    name = "ipwho"

    def __init__(self, url: str = IPWHO_URL) -> None:
        self.url = url


class CloudflareTraceResolver:
    """Reads ``loc=`` from Cloudflare's plain-text trace endpoint."""

    name = "cloudflare"

    def __init__(self, url: str = CLOUDFLARE_TRACE_URL) -> None:
        self.url = url

    async def resolve_country(self, client: httpx.AsyncClient) -> str:
        response = await client.get(self.url)
        if not response.is_success:
            raise GeoLookupError(f"cloudflare returned HTTP {response.status_code}")
        match = _TRACE_LOC.search(response.text)
        code = valid_country_code(match.group(1) if match else None)
        if code is None:
            raise GeoLookupError("cloudflare trace has no loc entry")
        return code


RESOLVERS: dict[str, type[IpapiResolver | IpwhoResolver | CloudflareTraceResolver]] = {
    "ipapi": IpapiResolver,
    "ipwho": IpwhoResolver,
    "cloudflare": CloudflareTraceResolver,
}


class GeoLocator:
    """Resolves the caller's country by trying providers in order."""

    def __init__(
        self,
        resolvers: Sequence[CountryResolver] | None = None,
        *,
        timeout: float = GEO_TIMEOUT,
        client: httpx.AsyncClient | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        """Initialize the locator.

        Args:
            resolvers: Providers in lookup order; all built-in ones by default.
            timeout: Per-request timeout when the locator owns its client.
            client: Optional shared client. It is never closed here.
            telemetry: Optional telemetry context.
        """
        if resolvers is None:
            resolvers = [factory() for factory in RESOLVERS.values()]
        self.resolvers = tuple(resolvers)
        self._timeout = timeout
        self._client = client
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    @classmethod
    def from_config(
        cls, config: FrozenConfig, *, client: httpx.AsyncClient | None = None
    ) -> GeoLocator:
        """Build a locator with the configured provider order."""
        return cls(
            [RESOLVERS[name]() for name in config.geo_providers],
            timeout=config.geo_timeout,
            client=client,
        )

    async def resolve_caller_country(self) -> str:
        """Return the caller's country code, or ``"XX"`` when unknown."""
        with self._telemetry("geo.lookup"):
            async with self._http_client() as client:
                for resolver in self.resolvers:
                    name = getattr(resolver, "name", type(resolver).__name__)
                    try:
                        code = valid_country_code(
                            await resolver.resolve_country(client)
                        )
                    except Exception as e:  # every provider failure is a miss
                        logger.debug("Geo provider %s failed: %s", name, e)
                        continue
                    if code is not None:
                        return code
                    logger.debug("Geo provider %s returned an invalid code", name)
        logger.info("Could not resolve caller country, using %s", UNKNOWN_COUNTRY)
        return UNKNOWN_COUNTRY

    @asynccontextmanager
    async def _http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(
            timeout=self._timeout, follow_redirects=True
        ) as client:
            yield client


async def resolve_caller_country(config: FrozenConfig | None = None) -> str:
    """Resolve the caller's country with the configured providers.

    Never raises; returns ``"XX"`` when no provider gives a usable answer.
    """
    if config is None:
        return await GeoLocator().resolve_caller_country()
    return await GeoLocator.from_config(config).resolve_caller_country()
