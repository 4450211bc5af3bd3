"""Resilient backend function invocation with an HTTP fallback."""

from .classification import classify_error, classify_message, is_fallback_eligible
from .invoker import Invoker, invoke_function
from .transports import FunctionsChannel, HttpFallbackTransport

__all__ = [
    "FunctionsChannel",
    "HttpFallbackTransport",
    "Invoker",
    "classify_error",
    "classify_message",
    "invoke_function",
    "is_fallback_eligible",
]
