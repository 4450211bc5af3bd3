"""Session-scoped state: storage, interaction tracking and visitor context."""

from .context import device_type, get_or_create_session_id, new_session_id, traffic_source
from .interaction import InteractionTracker
from .store import JSONFileSessionStore, MemorySessionStore, SessionStore

__all__ = [
    "InteractionTracker",
    "JSONFileSessionStore",
    "MemorySessionStore",
    "SessionStore",
    "device_type",
    "get_or_create_session_id",
    "new_session_id",
    "traffic_source",
]
