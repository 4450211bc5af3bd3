"""Geographic access policy and caller-country lookup."""

from .access import allow_list_tokens, is_allowed, normalize_country
from .lookup import (
    CloudflareTraceResolver,
    CountryResolver,
    GeoLocator,
    IpapiResolver,
    IpwhoResolver,
    resolve_caller_country,
    valid_country_code,
)

__all__ = [
    "CloudflareTraceResolver",
    "CountryResolver",
    "GeoLocator",
    "IpapiResolver",
    "IpwhoResolver",
    "allow_list_tokens",
    "is_allowed",
    "normalize_country",
    "resolve_caller_country",
    "valid_country_code",
]
