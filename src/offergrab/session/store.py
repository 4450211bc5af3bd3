"""Session-scoped key/value stores.

A store holds the string values of exactly one browsing session. Writes are
last-writer-wins; the values kept here only move one way or are idempotent,
so no locking is needed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import os

logger = logging.getLogger(__name__)


@runtime_checkable
class SessionStore(Protocol):
    """Minimal get/set/clear surface used by session-scoped components."""

    def get(self, key: str) -> str | None:
        """Return the value for `key`, if present."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store `value` under `key`."""
        ...

    def clear(self, key: str) -> None:
        """Remove `key`; a missing key is not an error."""
        ...


class MemorySessionStore:
    """Process-local store; one instance per session."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def clear(self, key: str) -> None:
        self._values.pop(key, None)

    def end(self) -> None:
        """Drop every value, as the host does when the session ends."""
        self._values.clear()


class JSONFileSessionStore:
    """Single JSON file holding one session's keys.

    Uses copy-on-write: write to a temp file and rename. A missing or
    unreadable file reads as an empty session.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def clear(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)

    def end(self) -> None:
        """Delete the backing file, ending the session."""
        self._path.unlink(missing_ok=True)

    def _read_all(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            result = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self._path, e)
            return {}
        return result if isinstance(result, dict) else {}

    def _write_all(self, data: dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self._path)
