"""
metrics.py – Geometric statistics over the path a string traces on the keyboard.

Every metric takes the ordered points of one string (a PointSequence or any
sequence of Point) and is 0 for sequences of at most one point.
"""

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
from scipy.stats import entropy

from classifier import Point, shift_unmap
from config import DEFAULT_THRESHOLDS, Thresholds
from points import PointSequence

Points = Union[PointSequence, Sequence[Point]]

N_DIRECTIONS = 8


@dataclass(frozen=True)
class MetricSet:
    unique_count: int
    total_length: float
    turn_count: int
    adjacency_ratio: float
    direction_entropy: float
    step_cv: float
    knight_ratio: float


def _coords(points: Points) -> np.ndarray:
    if isinstance(points, PointSequence):
        return points.to_array()
    if len(points) == 0:
        return np.zeros((0, 2), dtype=np.float64)
    return np.array([(p.x, p.y) for p in points], dtype=np.float64)


def _steps(points: Points) -> np.ndarray:
    """Displacements between consecutive points, shape (n-1, 2)."""
    xy = _coords(points)
    if len(xy) <= 1:
        return np.zeros((0, 2), dtype=np.float64)
    return np.diff(xy, axis=0)


def total_length(points: Points) -> float:
    d = _steps(points)
    return float(np.hypot(d[:, 0], d[:, 1]).sum())


def turn_count(points: Points, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> int:
    """
    Count direction changes sharper than `turn_angle` radians.
    Triples with a zero-length incoming or outgoing step are skipped.
    """
    d = _steps(points)
    if len(d) < 2:
        return 0
    v1, v2 = d[:-1], d[1:]
    n1 = np.hypot(v1[:, 0], v1[:, 1])
    n2 = np.hypot(v2[:, 0], v2[:, 1])
    ok = (n1 > 0) & (n2 > 0)
    if not ok.any():
        return 0
    dots = (v1[ok] * v2[ok]).sum(axis=1)
    cos = np.clip(dots / (n1[ok] * n2[ok]), -1.0, 1.0)
    angles = np.arccos(cos)
    return int(np.count_nonzero(np.isfinite(angles) & (angles > thresholds.turn_angle)))


def adjacency_ratio(points: Points, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> float:
    d = np.abs(_steps(points))
    if len(d) == 0:
        return 0.0
    adjacent = (d[:, 0] <= thresholds.adj_dx) & (d[:, 1] <= thresholds.adj_dy)
    return float(np.count_nonzero(adjacent) / len(d))


def direction_bins(points: Points) -> np.ndarray:
    """
    Quantize each non-zero step into one of 8 compass bins of 45 degrees.
    Returns the occupancy count of every bin.
    """
    d = _steps(points)
    moving = d[(d[:, 0] != 0) | (d[:, 1] != 0)]
    if len(moving) == 0:
        return np.zeros(N_DIRECTIONS, dtype=np.int64)
    angles = np.arctan2(moving[:, 1], moving[:, 0])
    # Round half up so bin edges land the same way on every platform.
    bins = np.floor((angles + np.pi) / (2 * np.pi) * N_DIRECTIONS + 0.5).astype(np.int64) % N_DIRECTIONS
    return np.bincount(bins, minlength=N_DIRECTIONS)


def direction_entropy(points: Points) -> float:
    """Shannon entropy in bits of the direction histogram, in [0, 3]."""
    counts = direction_bins(points)
    if counts.sum() == 0:
        return 0.0
    return float(entropy(counts, base=2))


def step_cv(points: Points) -> float:
    """Population standard deviation of the step lengths divided by their mean."""
    d = _steps(points)
    if len(d) == 0:
        return 0.0
    lengths = np.hypot(d[:, 0], d[:, 1])
    mean = lengths.mean()
    if mean == 0:
        return 0.0
    return float(lengths.std() / mean)


def knight_ratio(points: Points, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> float:
    d = np.abs(_steps(points))
    if len(d) == 0:
        return 0.0
    t = thresholds
    dx, dy = d[:, 0], d[:, 1]
    wide = (np.abs(dx - 2 * t.knight_pitch_x) <= t.knight_tolerance) & (
        np.abs(dy - t.knight_pitch_y) <= t.knight_tolerance
    )
    tall = (np.abs(dx - t.knight_pitch_x) <= t.knight_tolerance) & (
        np.abs(dy - 2 * t.knight_pitch_y) <= t.knight_tolerance
    )
    return float(np.count_nonzero(wide | tall) / len(d))


def unique_count(text: str) -> int:
    """Distinct characters after lowercasing and unmapping Shift symbols."""
    seen = set()
    for ch in text or "":
        lower = ch.lower()
        seen.add(shift_unmap(lower) or lower)
    return len(seen)


def compute_metrics(
    text: str,
    sequence: PointSequence,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> MetricSet:
    return MetricSet(
        unique_count=unique_count(text),
        total_length=total_length(sequence),
        turn_count=turn_count(sequence, thresholds),
        adjacency_ratio=adjacency_ratio(sequence, thresholds),
        direction_entropy=direction_entropy(sequence),
        step_cv=step_cv(sequence),
        knight_ratio=knight_ratio(sequence, thresholds),
    )
