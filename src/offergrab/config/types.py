"""Core configuration data types.

Configuration is resolved once from all sources, then frozen and handed to
components. ``ResolvedConfig`` keeps an audit trail of where each value came
from; ``FrozenConfig`` is what components actually consume.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

from offergrab.constants import (
    DEFAULT_FUNCTIONS_BASE_URL,
    DEFAULT_PUBLISHABLE_KEY,
    GEO_TIMEOUT,
    INTERACTION_KEY,
    NETWORK_TIMEOUT,
    SESSION_ID_KEY,
)
from offergrab.core.types import _require
from offergrab.exceptions import ConfigurationError

from .schema import KNOWN_GEO_PROVIDERS

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

_FIELD_ORDER = (
    "functions_base_url",
    "publishable_key",
    "request_timeout",
    "geo_providers",
    "geo_timeout",
    "interaction_key",
    "session_id_key",
)


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing."""

    functions_base_url: str
    publishable_key: str | None
    request_timeout: float
    geo_providers: str
    geo_timeout: float
    interaction_key: str
    session_id_key: str

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with the publishable key redacted."""
        key_display = "[REDACTED]" if self.publishable_key else None
        return (
            f"ResolvedConfig(functions_base_url={self.functions_base_url!r}, "
            f"publishable_key={key_display!r}, "
            f"request_timeout={self.request_timeout!r}, "
            f"geo_providers={self.geo_providers!r}, geo_timeout={self.geo_timeout!r}, "
            f"interaction_key={self.interaction_key!r}, "
            f"session_id_key={self.session_id_key!r}, origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        """Repr with the publishable key redacted."""
        return self.__str__()

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration consumed by components."""
        return FrozenConfig(
            functions_base_url=self.functions_base_url,
            publishable_key=self.publishable_key,
            request_timeout=self.request_timeout,
            geo_providers=tuple(n for n in self.geo_providers.split(",") if n),
            geo_timeout=self.geo_timeout,
            interaction_key=self.interaction_key,
            session_id_key=self.session_id_key,
        )

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Return a copy with programmatic overrides applied; unknown fields are ignored."""
        new_values = self._asdict()
        new_origin = dict(self.origin)
        for field, value in overrides.items():
            if field in _FIELD_ORDER:
                new_values[field] = value
                new_origin[field] = "programmatic"
        new_values["origin"] = new_origin
        return ResolvedConfig(**new_values)

    def audit(self) -> str:
        """Report the origin of each field, redacting the publishable key."""
        lines = []
        for field in _FIELD_ORDER:
            if field not in self.origin:
                continue
            origin = self.origin[field]
            value = getattr(self, field)
            if field == "publishable_key":
                shown = "None" if value is None else "<redacted>"
                lines.append(f"{field}: {origin}:{shown}")
            elif origin == "env":
                lines.append(f"{field}: env:OFFERGRAB_{field.upper()}={value}")
            else:
                lines.append(f"{field}: {origin}:{value}")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class FrozenConfig:
    """Immutable configuration handed to components."""

    functions_base_url: str = DEFAULT_FUNCTIONS_BASE_URL
    publishable_key: str | None = DEFAULT_PUBLISHABLE_KEY
    request_timeout: float = NETWORK_TIMEOUT
    geo_providers: tuple[str, ...] = ("ipapi", "ipwho", "cloudflare")
    geo_timeout: float = GEO_TIMEOUT
    interaction_key: str = INTERACTION_KEY
    session_id_key: str = SESSION_ID_KEY

    def __post_init__(self) -> None:
        """Validate invariants that components rely on."""
        _require(
            condition=isinstance(self.geo_providers, tuple)
            and all(name in KNOWN_GEO_PROVIDERS for name in self.geo_providers),
            message=f"must be a tuple drawn from {KNOWN_GEO_PROVIDERS}, "
            f"got {self.geo_providers!r}",
            exc=ConfigurationError,
            field_name="geo_providers",
        )

    def __repr__(self) -> str:
        """Repr with the publishable key redacted."""
        key_display = "[REDACTED]" if self.publishable_key else None
        return (
            f"FrozenConfig(functions_base_url={self.functions_base_url!r}, "
            f"publishable_key={key_display!r}, geo_providers={self.geo_providers!r})"
        )
