"""
keywalk.py – Entry points of the keyboard-walk analyzer.

    analyze_single(raw_text, layout_name)  -> SingleAnalysis
    analyze_profile(lines, layout_name)    -> ProfileSummary
    build_coord_map(layout_name)           -> Keyboard

Each call builds its own coordinate map and point sequence, so analyses
share no mutable state and can run side by side.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from classifier import Keyboard, Point, build_coord_map
from config import DEFAULT_THRESHOLDS, DEFAULT_WEIGHTS, ScoreWeights, Thresholds
from layouts import DEFAULT_LAYOUT, available_layouts
from metrics import MetricSet, compute_metrics
from patterns import Finding, detect_patterns
from points import PointSequence, UnknownChar, to_points
from profiler import ProfileSummary, analyze_profile
from scorer import DependencyScore, DependencyScorer
from walks import detect_walks

logger = logging.getLogger(__name__)

__all__ = [
    "SingleAnalysis",
    "analyze_single",
    "analyze_profile",
    "available_layouts",
    "build_coord_map",
    "Keyboard",
    "ProfileSummary",
]


@dataclass(frozen=True)
class SingleAnalysis:
    text: str
    layout: str
    sequence: PointSequence
    metrics: MetricSet
    walks: Tuple[str, ...]
    findings: Tuple[Finding, ...]
    score: DependencyScore

    @property
    def points(self) -> Tuple[Point, ...]:
        return self.sequence.points

    @property
    def unknown(self) -> Tuple[UnknownChar, ...]:
        return self.sequence.unknown

    @property
    def bad_findings(self) -> List[Finding]:
        return [f for f in self.findings if f.is_bad]


def analyze_single(
    raw_text: str,
    layout_name: str = DEFAULT_LAYOUT,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> SingleAnalysis:
    raw_text = raw_text or ""
    keyboard = build_coord_map(layout_name)
    sequence = to_points(raw_text, keyboard)
    metrics = compute_metrics(raw_text, sequence, thresholds)
    walks = detect_walks(raw_text, sequence.points, thresholds)
    findings = detect_patterns(raw_text, sequence, metrics, walks, thresholds)
    result = DependencyScorer(thresholds, weights).get_score(metrics, findings, len(raw_text))

    logger.debug(
        "Analyzed %d chars on '%s': %d points, %d unknown, score %d (%s).",
        len(raw_text), keyboard.name, len(sequence), len(sequence.unknown), result.value, result.label,
    )
    return SingleAnalysis(
        text=raw_text,
        layout=keyboard.name,
        sequence=sequence,
        metrics=metrics,
        walks=tuple(walks),
        findings=tuple(findings),
        score=result,
    )
