"""Basic exceptions for the offergrab client core"""  # noqa: D415

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from offergrab.core.types import ErrorKind


class OfferGrabError(Exception):
    """Base exception for offergrab client errors"""  # noqa: D415


class ConfigurationError(OfferGrabError, ValueError):
    """Raised when settings cannot be resolved or validated"""  # noqa: D415


class TransportError(OfferGrabError):
    """Raised by a function transport when a call fails.

    Transports that know *why* a call failed should pass ``kind`` so the
    invoker can classify the failure without inspecting the message text.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind | None = None,
        http_status: int | None = None,
    ) -> None:
        """Initialize with a message and optional structured classification."""
        super().__init__(message)
        self.kind = kind
        self.http_status = http_status


class GeoLookupError(OfferGrabError):
    """Raised by a country resolver when its provider gives no usable answer"""  # noqa: D415


class ExportError(OfferGrabError):
    """Raised when an export file cannot be written"""  # noqa: D415
