"""
patterns.py – Findings about a single analysed string.

Findings are structured values (kind, severity and payload); turning them
into display text is left to describe(), which only the command-line tools
call.
"""

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from config import DEFAULT_THRESHOLDS, Thresholds
from metrics import MetricSet
from points import PointSequence

KNOWN_SUBSTRINGS = ("qwerty", "asdf", "zxcv", "1234", "password", "pass", "admin")


class FindingKind(Enum):
    UNKNOWN_CHAR = "unknown_char"
    KNOWN_SUBSTRING = "known_substring"
    WALK = "walk"
    REPEAT = "repeat"
    STRAIGHT_LINE = "straight_line"
    HIGH_ADJACENCY = "high_adjacency"
    LOW_ENTROPY = "low_entropy"
    MONOTONIC_STEP = "monotonic_step"
    KNIGHT_MOVE = "knight_move"
    NONE = "none"


class Severity(Enum):
    BAD = "bad"
    GOOD = "good"
    INFO = "info"


@dataclass(frozen=True)
class Finding:
    kind: FindingKind
    severity: Severity
    text: str = ""
    chars: Tuple[str, ...] = ()
    count: int = 0
    value: float = 0.0

    @property
    def is_bad(self) -> bool:
        return self.severity is Severity.BAD


def known_substrings(raw: str) -> List[str]:
    s = (raw or "").lower()
    return [k for k in KNOWN_SUBSTRINGS if k in s]


def repeated_ngrams(raw: str, min_n: int = 2, max_n: int = 4, min_count: int = 3) -> List[Tuple[str, int]]:
    """
    Every n-gram (min_n <= n <= max_n) occurring at least `min_count` times,
    ordered by n and then by first occurrence. Grams containing whitespace
    are ignored.
    """
    s = (raw or "").lower()
    out: Dict[str, Tuple[str, int]] = {}
    for n in range(min_n, max_n + 1):
        freq: Dict[str, int] = defaultdict(int)
        for i in range(len(s) - n + 1):
            g = s[i:i + n]
            if any(c.isspace() for c in g):
                continue
            freq[g] += 1
        for g, c in freq.items():
            if c >= min_count:
                out.setdefault(f"{g}×{c}", (g, c))
    return list(out.values())


def detect_patterns(
    raw: str,
    sequence: PointSequence,
    metrics: MetricSet,
    walks: Sequence[str],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> List[Finding]:
    """
    Run every detector and return the findings in a fixed order:
    unknown characters, known substrings, walks, straight line, high
    adjacency, repeated n-grams, low entropy, monotonic steps, knight moves.
    A single NONE finding closes the list when nothing bad was found.
    """
    t = thresholds
    n_chars = len(raw or "")
    findings: List[Finding] = []
    if n_chars == 0:
        return findings

    if sequence.unknown:
        chars = tuple(sequence.unknown_chars)
        # Whitespace on its own is not a failure.
        only_space = all(c.isspace() for c in chars)
        findings.append(Finding(
            FindingKind.UNKNOWN_CHAR,
            Severity.INFO if only_space else Severity.BAD,
            chars=chars,
            count=len(chars),
        ))

    for k in known_substrings(raw):
        findings.append(Finding(FindingKind.KNOWN_SUBSTRING, Severity.BAD, text=k))

    for w in walks:
        findings.append(Finding(FindingKind.WALK, Severity.BAD, text=w, count=len(w)))

    if n_chars >= t.straight_min_length and metrics.turn_count <= 1:
        findings.append(Finding(FindingKind.STRAIGHT_LINE, Severity.BAD, count=metrics.turn_count))

    if n_chars >= t.high_adj_min_length and metrics.adjacency_ratio > t.high_adj_ratio:
        findings.append(Finding(FindingKind.HIGH_ADJACENCY, Severity.BAD, value=metrics.adjacency_ratio))

    for g, c in repeated_ngrams(raw, min_count=t.ngram_min_count):
        findings.append(Finding(FindingKind.REPEAT, Severity.BAD, text=g, count=c))

    if metrics.direction_entropy < t.entropy_bad:
        findings.append(Finding(FindingKind.LOW_ENTROPY, Severity.BAD, value=metrics.direction_entropy))

    if metrics.step_cv < t.stepcv_bad:
        findings.append(Finding(FindingKind.MONOTONIC_STEP, Severity.BAD, value=metrics.step_cv))

    if metrics.knight_ratio >= t.knight_ratio_min:
        findings.append(Finding(FindingKind.KNIGHT_MOVE, Severity.GOOD, value=metrics.knight_ratio))

    if n_chars > 0 and not any(f.is_bad for f in findings):
        findings.append(Finding(FindingKind.NONE, Severity.INFO))

    return findings


def bad_count(findings: Sequence[Finding]) -> int:
    return sum(1 for f in findings if f.is_bad)


def describe(finding: Finding) -> str:
    """Human readable one-line description of a finding."""
    kind = finding.kind
    if kind is FindingKind.UNKNOWN_CHAR:
        return "Unmapped characters: " + " ".join(repr(c) for c in finding.chars)
    if kind is FindingKind.KNOWN_SUBSTRING:
        return f'Common pattern: "{finding.text}"'
    if kind is FindingKind.WALK:
        return f'Adjacent-key walk: "{finding.text}"'
    if kind is FindingKind.STRAIGHT_LINE:
        return "Long straight movement (few changes of direction)"
    if kind is FindingKind.HIGH_ADJACENCY:
        return f"High adjacency ratio ({finding.value * 100:.0f}%)"
    if kind is FindingKind.REPEAT:
        return f"Repeated n-gram: {finding.text}×{finding.count}"
    if kind is FindingKind.LOW_ENTROPY:
        return f"Low direction entropy (H={finding.value:.2f})"
    if kind is FindingKind.MONOTONIC_STEP:
        return f"Uniform step length (CV={finding.value:.2f})"
    if kind is FindingKind.KNIGHT_MOVE:
        return f"High knight-move ratio ({finding.value * 100:.0f}%)"
    return "No pattern found"
