"""
classifier.py – Keyboard coordinate maps and transition predicates.

This module defines:
  - Keyboard: an immutable mapping from lowercase key character to its
    (x, y) position on a staggered grid, built from a registered layout.
    It also resolves raw input characters to keys, unmapping Shift symbols
    to the key that produces them.
  - Classifier: predicates over a pair of consecutive points (adjacent key,
    knight move, distances), parameterised by a Thresholds instance.
  - A test() function to quickly inspect the keyboards.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from config import DEFAULT_GEOMETRY, DEFAULT_THRESHOLDS, GeometrySettings, Thresholds
from layouts import DEFAULT_LAYOUT, available_layouts, get_layout, has_layout

# Shift symbol -> key typed without Shift (US-style number row and punctuation).
SHIFT_SYMBOLS: Mapping[str, str] = MappingProxyType({
    "!": "1", "@": "2", "#": "3", "$": "4", "%": "5",
    "^": "6", "&": "7", "*": "8", "(": "9", ")": "0",
    "~": "`", "_": "-", "+": "=", "{": "[", "}": "]",
    "|": "\\", ":": ";", '"': "'", "<": ",", ">": ".", "?": "/",
})

WHITESPACE = frozenset(" \t\r\n")


def shift_unmap(ch: str) -> Optional[str]:
    """Return the unshifted key for a Shift symbol, or None."""
    return SHIFT_SYMBOLS.get(ch)


@dataclass(frozen=True)
class KeyPosition:
    x: float
    y: float
    source_char: str


@dataclass(frozen=True)
class Point:
    """A mapped character: grid position, resolved key, and index in the input text."""
    x: float
    y: float
    key: str
    index: int


class Keyboard:
    """
    Represents the coordinate map of one keyboard layout.

    Row r is placed at y = base_y + r * row_gap. Within a row, column c sits
    at x = base_x + row_offset(r) + c * key_pitch; the per-row offsets
    reproduce the stagger of a physical keyboard. Digits the layout does not
    define get a synthetic position on a numeric row above the layout, so
    numeric strings never produce unknown characters because of gaps.

    Instances are never mutated after construction; selecting another layout
    means building another Keyboard.
    """

    def __init__(
        self,
        layout_name: str = DEFAULT_LAYOUT,
        geometry: GeometrySettings = DEFAULT_GEOMETRY,
    ) -> None:
        self.name: str = layout_name.lower() if has_layout(layout_name or "") else DEFAULT_LAYOUT
        self.rows: Tuple[str, ...] = get_layout(layout_name)
        self.geometry: GeometrySettings = geometry

        key_to_pos: Dict[str, KeyPosition] = {}
        pitch = geometry.key_pitch
        for r_idx, row in enumerate(self.rows):
            row_offset = geometry.row_offset(r_idx)
            for c_idx, k in enumerate(row):
                x = geometry.base_x + row_offset + c_idx * pitch
                y = geometry.base_y + r_idx * geometry.row_gap
                key_to_pos[k.lower()] = KeyPosition(x, y, k)

        # Numeric row fallback for layouts without a full digit row.
        for i, d in enumerate("1234567890"):
            if d not in key_to_pos:
                key_to_pos[d] = KeyPosition(geometry.base_x + i * pitch, geometry.numeric_row_y, d)

        self.key_to_pos: Mapping[str, KeyPosition] = MappingProxyType(key_to_pos)

    def __repr__(self) -> str:
        return f"Keyboard({self.name!r})\n" + "\n".join(" ".join(row) for row in self.rows)

    def __contains__(self, k: str) -> bool:
        return k in self.key_to_pos

    def __iter__(self) -> Iterator[str]:
        return iter(self.key_to_pos)

    def __len__(self) -> int:
        return len(self.key_to_pos)

    def get_pos(self, k: str) -> KeyPosition:
        """
        Return the position of key k (case-insensitive).
        Raises ValueError if k is not part of this keyboard.
        """
        pos = self.key_to_pos.get(k.lower())
        if pos is None:
            raise ValueError(f"Key '{k}' not found in layout '{self.name}'.")
        return pos

    def resolve_key(self, ch: str) -> Optional[str]:
        """
        Resolve an input character to a key of this keyboard.

        The character is lowercased first; if it is not a key itself, a Shift
        symbol is unmapped to its base key. Whitespace and anything else that
        cannot be resolved yields None.
        """
        if ch in WHITESPACE:
            return None
        lower = ch.lower()
        if lower in self.key_to_pos:
            return lower
        base = shift_unmap(lower)
        if base is not None and base in self.key_to_pos:
            return base
        return None

    def to_point(self, k: str, index: int) -> Point:
        pos = self.get_pos(k)
        return Point(pos.x, pos.y, k, index)


def build_coord_map(layout_name: str, geometry: GeometrySettings = DEFAULT_GEOMETRY) -> Keyboard:
    """Build a fresh coordinate map; unknown layout names fall back to the default."""
    return Keyboard(layout_name, geometry)


class Classifier:
    """
    Provides predicates over a transition between two consecutive points.
    """

    def __init__(self, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def get_dx(self, a: Point, b: Point) -> float:
        return abs(b.x - a.x)

    def get_dy(self, a: Point, b: Point) -> float:
        return abs(b.y - a.y)

    def is_adjacent(self, a: Point, b: Point) -> bool:
        t = self.thresholds
        return self.get_dx(a, b) <= t.adj_dx and self.get_dy(a, b) <= t.adj_dy

    def is_knight_move(self, a: Point, b: Point) -> bool:
        """True when the displacement is close to 2:1 or 1:2 key pitches."""
        t = self.thresholds
        dx, dy = self.get_dx(a, b), self.get_dy(a, b)

        def near(value: float, target: float) -> bool:
            return abs(value - target) <= t.knight_tolerance

        return (
            (near(dx, 2 * t.knight_pitch_x) and near(dy, t.knight_pitch_y))
            or (near(dx, t.knight_pitch_x) and near(dy, 2 * t.knight_pitch_y))
        )


def test() -> None:
    """
    A simple routine to compare the available keyboard layouts.
    """
    keyboards = {name: build_coord_map(name) for name in available_layouts()}
    names = list(keyboards.keys())
    for i in range(len(names)):
        for j in range(i + 1, len(names)):
            k1, k2 = names[i], names[j]
            common = "".join(
                k for k in keyboards[k1]
                if k in keyboards[k2]
                and (keyboards[k1].get_pos(k).x, keyboards[k1].get_pos(k).y)
                == (keyboards[k2].get_pos(k).x, keyboards[k2].get_pos(k).y)
            )
            print(f"{k1} <=> {k2}: keys in the same place: {common}")
    for kb in keyboards.values():
        print(f"{kb}\n")


if __name__ == "__main__":
    test()
