"""
config.py – Numeric settings shared by the analysis modules.

The defaults live in frozen dataclasses so that an analysis always runs
against one consistent, immutable set of numbers. Overrides are read from
JSON objects holding any subset of the field names, e.g.

    {"adj_dx": 64, "entropy_bad": 1.25}
"""

import json
import math
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Thresholds:
    # Adjacent-key transition: both deltas within these limits.
    adj_dx: float = 60
    adj_dy: float = 36
    entropy_bad: float = 1.50
    stepcv_bad: float = 0.25
    high_adj_ratio: float = 0.70
    turn_angle: float = 0.6  # radians
    # Knight moves: 2:1 / 1:2 multiples of the nominal key pitch.
    knight_pitch_x: float = 68
    knight_pitch_y: float = 78
    knight_tolerance: float = 12
    knight_ratio_min: float = 0.20
    straight_min_length: int = 4
    high_adj_min_length: int = 6
    ngram_min_count: int = 3


@dataclass(frozen=True)
class ScoreWeights:
    adjacency: float = 0.30
    entropy: float = 0.25
    straight: float = 0.20
    pattern: float = 0.15
    step_cv: float = 0.10
    bad_from: int = 60
    warning_from: int = 40


@dataclass(frozen=True)
class GeometrySettings:
    """Grid used to place keys. x grows to the right, y grows downwards."""
    base_x: float = 16
    base_y: float = 70
    row_gap: float = 78
    key_width: float = 52
    key_gap: float = 8
    # Row stagger in key widths: half, full and half a key for rows 1 to 3.
    row_shifts: Tuple[float, ...] = (0, 0.5, 1, 0.5)
    numeric_row_y: float = 16

    @property
    def key_pitch(self) -> float:
        return self.key_width + self.key_gap

    def row_offset(self, row: int) -> float:
        if row < len(self.row_shifts):
            return self.row_shifts[row] * self.key_width
        return 0


DEFAULT_THRESHOLDS = Thresholds()
DEFAULT_WEIGHTS = ScoreWeights()
DEFAULT_GEOMETRY = GeometrySettings()

# Divisors and grid pitches: these must be greater than zero.
POSITIVE_FIELDS = frozenset({
    "high_adj_ratio", "entropy_bad", "stepcv_bad", "knight_pitch_x", "knight_pitch_y",
    "key_width", "row_gap",
})


def _read_json_object(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Cannot find file: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"File '{path}' is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"File '{path}' must contain a JSON object.")
    return data


def apply_overrides(base, overrides: Dict[str, Any]):
    """
    Return a copy of dataclass `base` with the numeric fields in `overrides` replaced.
    Values must be finite and non-negative; POSITIVE_FIELDS must also be non-zero.
    """
    known = {f.name: f for f in fields(base)}
    changes = {}
    for name, value in overrides.items():
        if name not in known:
            raise ValueError(
                f"Unknown setting '{name}'. Choose from: {sorted(known)}."
            )
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Setting '{name}' must be a number, got {value!r}.")
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Setting '{name}' must be a finite, non-negative number, got {value!r}.")
        if name in POSITIVE_FIELDS and value == 0:
            raise ValueError(f"Setting '{name}' must be greater than zero.")
        changes[name] = value
    return replace(base, **changes)


def load_thresholds(path: str, base: Thresholds = DEFAULT_THRESHOLDS) -> Thresholds:
    return apply_overrides(base, _read_json_object(path))


def load_weights(path: str, base: ScoreWeights = DEFAULT_WEIGHTS) -> ScoreWeights:
    return apply_overrides(base, _read_json_object(path))
