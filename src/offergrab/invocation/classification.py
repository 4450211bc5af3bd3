"""Classification of primary-transport failures.

Only failures where the request never reached the backend are worth retrying
over the HTTP fallback. A structured ``kind`` on the exception wins; message
matching is the last resort for transports that raise plain exceptions.
"""

from __future__ import annotations

import httpx

from offergrab.constants import FALLBACK_PHRASES
from offergrab.core.types import ErrorKind


def classify_error(error: BaseException) -> ErrorKind:
    """Return the structured kind of a failed primary call."""
    structured = _structured_kind(error)
    if structured is not None:
        return structured

    if isinstance(error, httpx.HTTPStatusError):
        return ErrorKind.HTTP
    if isinstance(error, httpx.TransportError):
        return ErrorKind.NETWORK

    return classify_message(str(error))


def classify_message(message: str) -> ErrorKind:
    """Classify a failure by its message text alone."""
    lowered = message.lower()
    if any(phrase in lowered for phrase in FALLBACK_PHRASES):
        return ErrorKind.NETWORK
    return ErrorKind.OTHER


def is_fallback_eligible(error: BaseException) -> bool:
    """Whether a primary failure should be retried over the fallback transport."""
    return classify_error(error) is ErrorKind.NETWORK


def error_status(error: BaseException) -> int | None:
    """Best-effort HTTP status carried by an exception."""
    status = getattr(error, "http_status", None)
    if isinstance(status, int):
        return status
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None


def _structured_kind(error: BaseException) -> ErrorKind | None:
    kind = getattr(error, "kind", None)
    if kind is None:
        return None
    try:
        return ErrorKind(kind)
    except ValueError:
        # Unknown tags fall through to the heuristics
        return None
