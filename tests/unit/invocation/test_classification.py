import httpx
import pytest

from offergrab.core.types import ErrorKind
from offergrab.exceptions import TransportError
from offergrab.invocation import classify_error, classify_message, is_fallback_eligible


@pytest.mark.unit
@pytest.mark.parametrize(
    "message",
    [
        "Failed to send a request to the Edge Function",
        "FunctionsFetchError: Failed to send a request to the Edge Function",
        "TypeError: Failed to fetch",
        "FAILED TO FETCH",
        "failed to send a request to the edge function",
        "NetworkError when attempting to fetch resource.",
        "network connection was lost",
    ],
)
def test_network_messages_are_fallback_eligible(message):
    assert classify_message(message) is ErrorKind.NETWORK
    assert is_fallback_eligible(RuntimeError(message))


@pytest.mark.unit
@pytest.mark.parametrize(
    "message",
    [
        "Invalid input",
        "Edge Function returned a non-2xx status code",
        "failed to send a request",
        "",
    ],
)
def test_other_messages_are_terminal(message):
    assert classify_message(message) is ErrorKind.OTHER
    assert not is_fallback_eligible(RuntimeError(message))


@pytest.mark.unit
def test_structured_kind_wins_over_message():
    assert classify_error(TransportError("Invalid input", kind=ErrorKind.NETWORK)) is (
        ErrorKind.NETWORK
    )
    assert classify_error(TransportError("Failed to fetch", kind=ErrorKind.HTTP)) is (
        ErrorKind.HTTP
    )


@pytest.mark.unit
def test_string_kind_tags_are_accepted():
    class TaggedError(Exception):
        kind = "network"

    assert classify_error(TaggedError("opaque")) is ErrorKind.NETWORK


@pytest.mark.unit
def test_unknown_kind_tag_falls_back_to_heuristics():
    class OddError(Exception):
        kind = "teapot"

    assert classify_error(OddError("Failed to fetch")) is ErrorKind.NETWORK
    assert classify_error(OddError("nope")) is ErrorKind.OTHER


@pytest.mark.unit
def test_transport_error_without_kind_uses_message():
    assert classify_error(TransportError("Failed to fetch")) is ErrorKind.NETWORK
    assert classify_error(TransportError("bad request")) is ErrorKind.OTHER


@pytest.mark.unit
def test_httpx_exceptions_are_classified_structurally():
    request = httpx.Request("POST", "https://example.test/fn")
    response = httpx.Response(500, request=request)

    assert classify_error(httpx.ConnectTimeout("timed out")) is ErrorKind.NETWORK
    assert (
        classify_error(httpx.HTTPStatusError("server error", request=request, response=response))
        is ErrorKind.HTTP
    )
