"""
Global test configuration for the offergrab client core.
"""

from collections.abc import Callable
import logging
import os

import httpx
import pytest

from offergrab.session import MemorySessionStore


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_offergrab_env(monkeypatch):
    """Ensure a clean OFFERGRAB_* environment for each test.

    Telemetry toggles are removed as well so that scopes stay no-ops unless a
    test enables them explicitly.
    """
    for key in list(os.environ.keys()):
        if key.startswith("OFFERGRAB_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    for marker in (
        "unit: Fast, isolated unit tests",
        "contract: Behavioral contracts shared by all components",
    ):
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


@pytest.fixture
def memory_store() -> MemorySessionStore:
    """A fresh, empty session store."""
    return MemorySessionStore()


@pytest.fixture
def mock_http() -> Callable[..., httpx.AsyncClient]:
    """Build an ``httpx.AsyncClient`` served by a request handler.

    Usage:
        client = mock_http(lambda request: httpx.Response(200, json={}))
    """

    def _build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _build
