"""offergrab: client-side decision and resilience core for landing pages.

Four independent components, composed by the caller:

- ``Invoker``: backend function calls with a single HTTP fallback
- ``is_allowed`` / ``GeoLocator``: country allow-list policy and lookup
- ``InteractionTracker``: session flag that cancels automatic redirects
- ``to_csv`` / ``export_csv``: deterministic CSV export
"""

from .config import FrozenConfig, load_config, resolve_config
from .core.types import Column, ErrorInfo, ErrorKind, Failure, Result, Success
from .exceptions import (
    ConfigurationError,
    ExportError,
    GeoLookupError,
    OfferGrabError,
    TransportError,
)
from .export import export_csv, to_csv
from .geo import GeoLocator, is_allowed, resolve_caller_country
from .invocation import FunctionsChannel, HttpFallbackTransport, Invoker, invoke_function
from .session import (
    InteractionTracker,
    JSONFileSessionStore,
    MemorySessionStore,
    SessionStore,
    get_or_create_session_id,
)

__version__ = "0.1.0"

__all__ = [
    "Column",
    "ConfigurationError",
    "ErrorInfo",
    "ErrorKind",
    "ExportError",
    "Failure",
    "FrozenConfig",
    "FunctionsChannel",
    "GeoLocator",
    "GeoLookupError",
    "HttpFallbackTransport",
    "InteractionTracker",
    "Invoker",
    "JSONFileSessionStore",
    "MemorySessionStore",
    "OfferGrabError",
    "Result",
    "SessionStore",
    "Success",
    "TransportError",
    "export_csv",
    "get_or_create_session_id",
    "invoke_function",
    "is_allowed",
    "load_config",
    "resolve_caller_country",
    "resolve_config",
    "to_csv",
]
