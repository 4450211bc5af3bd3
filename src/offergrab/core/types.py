"""Core data types shared by the client components.

Every outcome that crosses a component boundary is an immutable value. Remote
calls resolve to a ``Result`` instead of raising, so callers branch on data
rather than wrapping each call in ``try``/``except``.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
import typing

# --- Minimal guard helpers ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Result Monad ---
# Failures are a predictable part of the data flow: the invocation layer
# returns them instead of letting transport exceptions escape.

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure")


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful result."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed result, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]

type JSON = dict[str, typing.Any] | list[typing.Any] | str | int | float | bool | None


class ErrorKind(str, Enum):
    """Structured classification of a failed remote call."""

    NETWORK = "network"  # Request never produced a response; fallback eligible
    HTTP = "http"  # Response arrived with a non-success status
    OTHER = "other"  # Application error; terminal


HTTP_PAYMENT_REQUIRED = 402
HTTP_TOO_MANY_REQUESTS = 429


@dataclasses.dataclass(frozen=True, slots=True)
class ErrorInfo:
    """Caller-readable description of a failed invocation."""

    message: str
    http_status: int | None = None
    kind: ErrorKind = ErrorKind.OTHER

    def __post_init__(self) -> None:
        """Validate invariants for type safety."""
        _require(
            condition=isinstance(self.message, str),
            message="must be str",
            field_name="message",
            exc=TypeError,
        )
        _require(
            condition=self.http_status is None or isinstance(self.http_status, int),
            message="must be int or None",
            field_name="http_status",
            exc=TypeError,
        )

    @property
    def is_rate_limited(self) -> bool:
        """Whether the backend rejected the call for exceeding a rate limit."""
        return self.http_status == HTTP_TOO_MANY_REQUESTS

    @property
    def is_payment_required(self) -> bool:
        """Whether the backend rejected the call for exhausted credits."""
        return self.http_status == HTTP_PAYMENT_REQUIRED


type InvocationResult = Success[JSON] | Failure[ErrorInfo]


@dataclasses.dataclass(frozen=True, slots=True)
class Column:
    """One output column of a CSV export: record key and header label."""

    key: str
    header: str

    def __post_init__(self) -> None:
        """Validate invariants for type safety."""
        _require(
            condition=isinstance(self.key, str) and bool(self.key),
            message="must be a non-empty str",
            field_name="key",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.header, str),
            message="must be str",
            field_name="header",
            exc=TypeError,
        )
