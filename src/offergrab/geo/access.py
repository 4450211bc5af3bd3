"""Country allow-list policy for web results.

Pure and deterministic. The policy is fail-open: a result with no
restriction, a worldwide entry, or a visitor whose country could not be
resolved is always shown.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import re

from offergrab.constants import COUNTRY_ALIASES, UNKNOWN_COUNTRY, WORLDWIDE_TOKENS

# A single admin-entered entry may pack several codes: "US IN", "us,ca", "GB|IE"
_SEPARATORS = re.compile(r"[\s,|]+")


def allow_list_tokens(allow_list: Iterable[str] | None) -> list[str]:
    """Split raw allow-list entries into lower-cased country tokens.

    Whole-entry country names (``"United States"``) are mapped to their code
    first, since splitting would break them apart. Empty fragments are
    dropped.
    """
    tokens: list[str] = []
    for entry in allow_list or ():
        if not isinstance(entry, str):
            continue
        collapsed = " ".join(entry.lower().split())
        alias = COUNTRY_ALIASES.get(collapsed)
        if alias:
            tokens.append(alias.lower())
        for fragment in _SEPARATORS.split(entry):
            if fragment:
                tokens.append(fragment.lower())
    return tokens


def normalize_country(code: str | None) -> str:
    """Upper-case and strip a country code; ``None`` becomes empty."""
    return (code or "").strip().upper()


def is_allowed(allow_list: Sequence[str] | None, caller_country: str | None) -> bool:
    """Decide whether a visitor from ``caller_country`` may see a result.

    Args:
        allow_list: Raw allow-list entries; ``None`` or empty means unrestricted.
        caller_country: Two-letter code of the visitor; ``"XX"`` or empty
            when unknown.

    Returns:
        True when the result is visible to the visitor.
    """
    if not allow_list:
        return True

    tokens = allow_list_tokens(allow_list)
    if any(token in WORLDWIDE_TOKENS for token in tokens):
        return True

    country = normalize_country(caller_country)
    if not country or country == UNKNOWN_COUNTRY:
        return True

    for token in tokens:
        if token.upper() == country:
            return True
        if COUNTRY_ALIASES.get(token) == country:
            return True
    return False
