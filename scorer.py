from abc import ABC
from dataclasses import dataclass
from math import floor
from typing import Sequence

from config import DEFAULT_THRESHOLDS, DEFAULT_WEIGHTS, ScoreWeights, Thresholds
from metrics import MetricSet
from patterns import Finding, bad_count

GOOD = "good"
WARNING = "warning"
BAD = "bad"


@dataclass(frozen=True)
class DependencyScore:
    value: int
    label: str


def _clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, v))


def score(
    adjacency_ratio: float,
    entropy: float,
    turn_count: int,
    char_length: int,
    step_cv: float,
    findings_count: int,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> int:
    """
    Keyboard dependency score in [0, 100]: a weighted sum of five components,
    each clamped to [0, 1] before weighting.
    """
    t, w = thresholds, weights
    norm_adj = _clamp(adjacency_ratio / t.high_adj_ratio)
    low_entropy = _clamp((t.entropy_bad - entropy) / t.entropy_bad)
    straight = 1.0 if (char_length >= t.straight_min_length and turn_count <= 1) else 0.0
    pattern = 1.0 if findings_count > 0 else 0.0
    low_cv = _clamp((t.stepcv_bad - step_cv) / t.stepcv_bad)

    total = (
        w.adjacency * norm_adj
        + w.entropy * low_entropy
        + w.straight * straight
        + w.pattern * pattern
        + w.step_cv * low_cv
    )
    # Half-up rounding, then keep inside the scale.
    return int(max(0, min(100, floor(100 * total + 0.5))))


def label_for(value: int, weights: ScoreWeights = DEFAULT_WEIGHTS) -> str:
    if value >= weights.bad_from:
        return BAD
    if value >= weights.warning_from:
        return WARNING
    return GOOD


# --- Define the scorer interface and classes ---

class IScorer(ABC):
    def get_score(self, metrics: MetricSet, findings: Sequence[Finding], char_length: int) -> DependencyScore:
        ...


class DependencyScorer(IScorer):
    def __init__(self, thresholds: Thresholds = DEFAULT_THRESHOLDS, weights: ScoreWeights = DEFAULT_WEIGHTS):
        self.thresholds = thresholds
        self.weights = weights

    def get_score(self, metrics, findings, char_length):
        value = score(
            adjacency_ratio=metrics.adjacency_ratio,
            entropy=metrics.direction_entropy,
            turn_count=metrics.turn_count,
            char_length=char_length,
            step_cv=metrics.step_cv,
            findings_count=bad_count(findings),
            thresholds=self.thresholds,
            weights=self.weights,
        )
        return DependencyScore(value, label_for(value, self.weights))
