"""
layouts.py – Registry of the keyboard layouts the analyzer can map onto.

Each layout is an ordered tuple of rows, top row first. A row is a plain
string holding one character per key, so the column index of a key is its
index in the string. Lookups are case-insensitive, which means every
character of a layout must stay unique after lowercasing.
"""

import logging
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

Layout = Tuple[str, ...]

DEFAULT_LAYOUT = "qwerty"

_LAYOUTS: Dict[str, Layout] = {}


def validate_layout(name: str, rows: Layout) -> None:
    """Raise ValueError if the rows of a layout would map ambiguously."""
    if not rows:
        raise ValueError(f"Layout '{name}' has no rows.")
    seen: Dict[str, Tuple[int, int]] = {}
    for r_idx, row in enumerate(rows):
        for c_idx, k in enumerate(row):
            folded = k.lower()
            if len(folded) != 1:
                raise ValueError(
                    f"Layout '{name}' key {k!r} at row {r_idx} does not fold to a single character."
                )
            if folded in seen:
                raise ValueError(
                    f"Layout '{name}' repeats key {k!r} at row {r_idx}, column {c_idx} "
                    f"(first seen at {seen[folded]})."
                )
            seen[folded] = (r_idx, c_idx)


def register_layout(name: str, rows: Layout) -> None:
    """Add a layout to the registry. Names are stored lowercase."""
    rows = tuple(rows)
    validate_layout(name, rows)
    _LAYOUTS[name.lower()] = rows


def available_layouts() -> List[str]:
    return list(_LAYOUTS.keys())


def has_layout(name: str) -> bool:
    return name.lower() in _LAYOUTS


def get_layout(name: str) -> Layout:
    """
    Return the rows of layout `name`.
    Unknown names fall back to the default layout instead of failing.
    """
    rows = _LAYOUTS.get((name or "").lower())
    if rows is None:
        logger.warning("Unknown layout '%s', falling back to '%s'.", name, DEFAULT_LAYOUT)
        return _LAYOUTS[DEFAULT_LAYOUT]
    return rows


register_layout(
    "qwerty",
    (
        "`1234567890-=",
        "qwertyuiop[]\\",
        "asdfghjkl;'",
        "zxcvbnm,./",
    ),
)

# Simplified JIS: main keys only.
register_layout(
    "jis",
    (
        "`1234567890-^\\",
        "qwertyuiop@[",
        "asdfghjkl;:]",
        "zxcvbnm,./_",
    ),
)

register_layout(
    "dvorak",
    (
        "`1234567890[]",
        "',.pyfgcrl/=",
        "aoeuidhtns-",
        ";qjkxbmwvz",
    ),
)
