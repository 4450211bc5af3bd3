"""Session interaction tracking that gates automatic redirects.

Once a visitor interacts with the page (a related search, a web result, any
outbound link) pending automatic redirects are cancelled for the rest of the
session. The flag only goes back through ``clear_interaction``, which normal
traffic never calls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from offergrab.constants import INTERACTED_VALUE, INTERACTION_KEY

if TYPE_CHECKING:
    from offergrab.config import FrozenConfig

    from .store import SessionStore

logger = logging.getLogger(__name__)


class InteractionTracker:
    """Two-state flag: not interacted -> interacted."""

    def __init__(self, store: SessionStore, key: str = INTERACTION_KEY) -> None:
        self._store = store
        self.key = key

    @classmethod
    def from_config(cls, store: SessionStore, config: FrozenConfig) -> InteractionTracker:
        return cls(store, config.interaction_key)

    def mark_interaction(self) -> None:
        """Record that the visitor interacted. Idempotent."""
        if not self.has_interacted():
            logger.debug("Visitor interaction recorded; auto-redirects cancelled")
        self._store.set(self.key, INTERACTED_VALUE)

    def has_interacted(self) -> bool:
        return self._store.get(self.key) == INTERACTED_VALUE

    def clear_interaction(self) -> None:
        """Reset the flag. For tests and admin overrides only."""
        self._store.clear(self.key)

    def should_redirect(self) -> bool:
        """Whether a pending automatic redirect may still fire."""
        return not self.has_interacted()
