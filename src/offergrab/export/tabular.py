"""CSV serialization for admin data exports.

Output is deterministic: column order comes from the caller, lines are joined
with ``\\n`` and there is no trailing newline. A field is quoted only when it
contains a comma, a double quote or a newline.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import logging
from pathlib import Path
from typing import Any

from offergrab.constants import CSV_SUFFIX
from offergrab.core.types import Column
from offergrab.exceptions import ExportError

logger = logging.getLogger(__name__)

type ColumnSpec = Column | tuple[str, str] | Mapping[str, str]

_NEEDS_QUOTING = (",", '"', "\n")


def as_column(spec: ColumnSpec) -> Column:
    """Coerce a ``Column``, ``(key, header)`` pair or mapping into a ``Column``."""
    if isinstance(spec, Column):
        return spec
    if isinstance(spec, Mapping):
        return Column(key=spec["key"], header=spec["header"])
    key, header = spec
    return Column(key=key, header=header)


def escape_field(value: Any) -> str:
    """Render one value as a CSV field."""
    if value is None:
        return ""
    text = str(value)
    if any(ch in text for ch in _NEEDS_QUOTING):
        return '"' + text.replace('"', '""') + '"'
    return text


def _lookup(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def to_csv(records: Sequence[Any], columns: Iterable[ColumnSpec]) -> str:
    """Serialize records to CSV text.

    Header labels are quoted by the same rules as data fields, so a label
    containing a comma stays a single column.

    Args:
        records: Mappings or objects; missing keys/attributes become empty fields.
        columns: Ordered column specs selecting and labelling fields.

    Returns:
        Header line plus one line per record, or ``""`` when there are no
        records.
    """
    if not records:
        return ""

    cols = [as_column(c) for c in columns]
    lines = [",".join(escape_field(c.header) for c in cols)]
    lines.extend(
        ",".join(escape_field(_lookup(record, c.key)) for c in cols)
        for record in records
    )
    return "\n".join(lines)


def export_csv(
    csv_text: str, filename: str, *, directory: str | Path | None = None
) -> Path:
    """Write CSV text to a UTF-8 file and return its path.

    A ``.csv`` suffix is appended when ``filename`` has none.

    Raises:
        ExportError: If the file cannot be written.
    """
    path = Path(directory or Path.cwd()) / filename
    if not path.suffix:
        path = path.with_suffix(CSV_SUFFIX)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(csv_text, encoding="utf-8", newline="")
    except OSError as e:
        raise ExportError(f"Failed to write export {path}: {e}") from e
    logger.info("Exported %d bytes to %s", len(csv_text.encode("utf-8")), path)
    return path
