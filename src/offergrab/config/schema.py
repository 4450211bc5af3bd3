"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from various sources (environment, files, programmatic) into the correct
types with proper defaults.
"""

from collections.abc import Sequence
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from offergrab.constants import (
    DEFAULT_FUNCTIONS_BASE_URL,
    DEFAULT_PUBLISHABLE_KEY,
    GEO_TIMEOUT,
    INTERACTION_KEY,
    NETWORK_TIMEOUT,
    SESSION_ID_KEY,
)

KNOWN_GEO_PROVIDERS = ("ipapi", "ipwho", "cloudflare")


class OfferGrabSettings(BaseSettings):
    """Pydantic settings schema for the client core.

    Handles validation, type coercion and defaults for every configuration
    field. Environment variables use the ``OFFERGRAB_`` prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="OFFERGRAB_",
        env_file=None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Backend functions ---

    functions_base_url: str = Field(
        default=DEFAULT_FUNCTIONS_BASE_URL,
        description="Base URL the HTTP fallback posts function calls to",
        min_length=1,
    )

    publishable_key: str | None = Field(
        default=DEFAULT_PUBLISHABLE_KEY,
        description="Publishable key sent as apikey and bearer token",
    )

    request_timeout: float = Field(
        default=NETWORK_TIMEOUT,
        description="Timeout in seconds for the HTTP fallback transport",
        gt=0,
    )

    # --- Geo lookup ---

    geo_providers: str = Field(
        default=",".join(KNOWN_GEO_PROVIDERS),
        description="Comma-separated geo providers, tried in order",
    )

    geo_timeout: float = Field(
        default=GEO_TIMEOUT,
        description="Timeout in seconds for each geo provider",
        gt=0,
    )

    # --- Session storage keys ---

    interaction_key: str = Field(default=INTERACTION_KEY, min_length=1)
    session_id_key: str = Field(default=SESSION_ID_KEY, min_length=1)

    # --- Validation Rules ---

    @field_validator("functions_base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop trailing slashes."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"functions_base_url must be an http(s) URL, got: {v!r}")
        return v.rstrip("/")

    @field_validator("geo_providers", mode="before")
    @classmethod
    def parse_geo_providers(cls, v: Any) -> str:
        """Accept a comma-separated string or a sequence of provider names."""
        if isinstance(v, str):
            names = [n.strip().lower() for n in v.split(",")]
        elif isinstance(v, Sequence):
            names = [str(n).strip().lower() for n in v]
        else:
            raise ValueError(f"Invalid geo_providers: {v!r}")

        names = [n for n in names if n]
        unknown = [n for n in names if n not in KNOWN_GEO_PROVIDERS]
        if unknown:
            raise ValueError(
                f"Unknown geo providers: {unknown}. "
                f"Must be drawn from: {', '.join(KNOWN_GEO_PROVIDERS)}"
            )
        return ",".join(names)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary keyed by field name."""
        return self.model_dump()
