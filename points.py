"""
points.py – Turn a string into the ordered sequence of key positions it visits.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from classifier import Keyboard, Point


@dataclass(frozen=True)
class UnknownChar:
    """A character that could not be placed on the keyboard, with its index in the input."""
    char: str
    index: int


@dataclass(frozen=True)
class PointSequence:
    points: Tuple[Point, ...]
    unknown: Tuple[UnknownChar, ...]

    def __len__(self) -> int:
        return len(self.points)

    @property
    def unknown_chars(self) -> List[str]:
        return [u.char for u in self.unknown]

    def to_array(self) -> np.ndarray:
        """Return the coordinates as an (n, 2) float array."""
        if not self.points:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array([(p.x, p.y) for p in self.points], dtype=np.float64)


def to_points(text: str, keyboard: Keyboard) -> PointSequence:
    """
    Map each character of `text` onto `keyboard`.

    Iteration is per code point. Whitespace and characters the keyboard cannot
    resolve are collected as unknown; they take no place in the point list, so
    the two lists keep input order but share no indices.
    """
    points: List[Point] = []
    unknown: List[UnknownChar] = []
    for i, ch in enumerate(text or ""):
        k = keyboard.resolve_key(ch)
        if k is None:
            unknown.append(UnknownChar(ch, i))
        else:
            points.append(keyboard.to_point(k, i))
    return PointSequence(tuple(points), tuple(unknown))
