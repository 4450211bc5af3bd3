"""Session identity and visitor context helpers."""

from __future__ import annotations

import re
import secrets
import string
import time
from typing import TYPE_CHECKING, Literal
from urllib.parse import urlsplit

from offergrab.constants import SESSION_ID_KEY

if TYPE_CHECKING:
    from .store import SessionStore

DeviceType = Literal["mobile", "desktop"]

_BASE36 = string.digits + string.ascii_lowercase
_MOBILE_UA = re.compile(r"Mobile|Android|iPhone|iPad")

# Referrer host fragment -> reported source, checked in order
_KNOWN_SOURCES = (
    ("google", "google"),
    ("facebook", "facebook"),
    ("twitter", "twitter"),
    ("x.com", "twitter"),
    ("instagram", "instagram"),
    ("linkedin", "linkedin"),
)


def new_session_id() -> str:
    """Return a fresh ``session_<epoch ms>_<9 base36 chars>`` identifier."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"session_{time.time_ns() // 1_000_000}_{suffix}"


def get_or_create_session_id(store: SessionStore, key: str = SESSION_ID_KEY) -> str:
    """Return the session's id, creating and storing one on first use."""
    session_id = store.get(key)
    if not session_id:
        session_id = new_session_id()
        store.set(key, session_id)
    return session_id


def device_type(user_agent: str | None) -> DeviceType:
    """Coarse device class from a User-Agent string."""
    if user_agent and _MOBILE_UA.search(user_agent):
        return "mobile"
    return "desktop"


def traffic_source(referrer: str | None) -> str:
    """Name the traffic source of a visit from its referrer URL.

    No referrer, or one that does not parse to a host, is ``"direct"``.
    Well-known networks are reported by name; anything else by host name.
    """
    if not referrer:
        return "direct"
    try:
        hostname = (urlsplit(referrer).hostname or "").lower()
    except ValueError:
        return "direct"
    if not hostname:
        return "direct"

    for fragment, source in _KNOWN_SOURCES:
        if fragment in hostname:
            return source
    return hostname
