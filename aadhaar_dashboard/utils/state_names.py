"""
State name normalization.

Maps free-text state names (full names, vehicle-registration style codes,
old spellings) onto the canonical list in ``constants.INDIAN_STATES``.
"""
import re
from typing import Optional

from aadhaar_dashboard.utils.constants import INDIAN_STATES, STATE_ALIASES, VALID_STATE_SET

_WHITESPACE = re.compile(r"\s+")


def clean_state_text(state_name: Optional[str]) -> str:
    """Lower-case, trim and collapse internal whitespace."""
    if not state_name:
        return ""
    return _WHITESPACE.sub(" ", str(state_name).lower().strip())


def title_case(text: str) -> str:
    """Upper-case the first letter of each space separated word."""
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def normalize_state_name(state_name: Optional[str]) -> str:
    """
    Normalize a free-text state name to its canonical display name.

    Resolution order:
    1. Exact alias lookup
    2. Substring containment against aliases (declaration order, first hit wins)
    3. Substring containment against the canonical names
    4. Title-cased input (may not be a valid state)

    Args:
        state_name: Raw state text from an upload

    Returns:
        Canonical name, title-cased fallback, or "" for empty input
    """
    cleaned = clean_state_text(state_name)
    if not cleaned:
        return ""

    if cleaned in STATE_ALIASES:
        return STATE_ALIASES[cleaned]

    for alias, canonical in STATE_ALIASES.items():
        if alias in cleaned or cleaned in alias:
            return canonical

    for valid_state in INDIAN_STATES:
        lowered = valid_state.lower()
        if lowered == cleaned or cleaned in lowered or lowered in cleaned:
            return valid_state

    return title_case(cleaned)


def is_valid_indian_state(state_name: Optional[str]) -> bool:
    """Check whether the text normalizes into the canonical 36-member set."""
    return normalize_state_name(state_name) in VALID_STATE_SET
