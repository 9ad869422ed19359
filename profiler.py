"""
profiler.py – Habits shared by a list of passwords.

analyze_profile() runs the point-sequence builder and the path metrics on
every line, then folds the results into one ProfileSummary: key and bigram
frequencies, averaged metrics, prefix/suffix families and the zone bias of
all visited keys.

Prefix and suffix families are plain tables of PatternRule; adding a family
means adding a row, not code.
"""

import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Pattern, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from classifier import Point, build_coord_map
from config import DEFAULT_THRESHOLDS, Thresholds
from layouts import DEFAULT_LAYOUT
from metrics import adjacency_ratio, total_length, turn_count
from points import to_points
from utils import top_n

logger = logging.getLogger(__name__)

TOP_KEYS = 8
TOP_BIGRAMS = 5


@dataclass(frozen=True)
class PatternRule:
    label: str
    matcher: Pattern[str]

    def matches(self, line: str) -> bool:
        return self.matcher.search(line) is not None


def _rule(label: str, pattern: str) -> PatternRule:
    return PatternRule(label, re.compile(pattern))


# "Welcome2024" ends in a year under this rule; keep the 2010-2025 range.
SUFFIX_RULES: Tuple[PatternRule, ...] = (
    _rule("year", r"20(?:1[0-9]|2[0-5])$"),  # 2010-2025
    _rule("digit sequence", r"[0-9]{2,}$"),
    _rule("trailing !", r"!+$"),
    _rule("trailing ?", r"\?+$"),
    _rule("trailing -_. run", r"[-_.]{2,}$"),
)

PREFIX_RULES: Tuple[PatternRule, ...] = (
    _rule("capitalized word", r"^[A-Z][a-z]{2,}"),
    _rule("all-caps start", r"^[A-Z]{2,}"),
    _rule("all-lowercase start", r"^[a-z]{2,}"),
    _rule("letters+digits+punctuation", r"^[A-Za-z]+[0-9]+[!?.]+$"),
)


@dataclass(frozen=True)
class ZoneBias:
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    middle: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True)
class ProfileSummary:
    layout: str
    line_count: int = 0
    top_keys: List[Tuple[str, int]] = field(default_factory=list)
    top_bigrams: List[Tuple[str, int]] = field(default_factory=list)
    suffix_patterns: List[Tuple[str, int]] = field(default_factory=list)
    prefix_patterns: List[Tuple[str, int]] = field(default_factory=list)
    zones: ZoneBias = ZoneBias()
    avg_adjacency: float = 0.0
    avg_turns: float = 0.0
    avg_length: float = 0.0
    used_keys: FrozenSet[str] = frozenset()
    key_counts: Dict[str, int] = field(default_factory=dict)
    bigram_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def unique_key_count(self) -> int:
        return len(self.used_keys)


def count_rule_matches(lines: Sequence[str], rules: Sequence[PatternRule]) -> List[Tuple[str, int]]:
    """(label, matching line count) for every rule matching at least one line, in table order."""
    out = []
    for rule in rules:
        c = sum(1 for line in lines if rule.matches(line))
        if c > 0:
            out.append((rule.label, c))
    return out


def summarize_suffixes(lines: Sequence[str]) -> List[Tuple[str, int]]:
    return count_rule_matches(lines, SUFFIX_RULES)


def summarize_prefixes(lines: Sequence[str]) -> List[Tuple[str, int]]:
    return count_rule_matches(lines, PREFIX_RULES)


def summarize_zones(points: Sequence[Point]) -> ZoneBias:
    """
    Split the points at the middle of their x extent (left/right) and into
    thirds of their y extent (top/middle/bottom). Boundary points belong to
    the left, top or middle side.
    """
    if not points:
        return ZoneBias()
    xy = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    xs, ys = xy[:, 0], xy[:, 1]
    mid_x = (xs.min() + xs.max()) / 2
    y_min, y_max = ys.min(), ys.max()
    y_top = y_min + (y_max - y_min) / 3
    y_bottom = y_min + 2 * (y_max - y_min) / 3

    n = len(xy)
    left = np.count_nonzero(xs <= mid_x)
    top = np.count_nonzero(ys <= y_top)
    middle = np.count_nonzero((ys > y_top) & (ys <= y_bottom))
    return ZoneBias(
        left=left / n,
        right=(n - left) / n,
        top=top / n,
        middle=middle / n,
        bottom=(n - top - middle) / n,
    )


def analyze_profile(
    lines: Sequence[str],
    layout_name: str = DEFAULT_LAYOUT,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
    top_keys: int = TOP_KEYS,
    top_bigrams: int = TOP_BIGRAMS,
    progress: bool = False,
) -> ProfileSummary:
    """
    Aggregate the habits of many passwords. Lines are trimmed and blank
    lines are dropped before anything is counted.
    """
    keyboard = build_coord_map(layout_name)
    lines = [s.strip() for s in lines if s and s.strip()]
    if not lines:
        return ProfileSummary(layout=keyboard.name)

    used = set()
    key_freq: Dict[str, int] = defaultdict(int)
    bigram_freq: Dict[str, int] = defaultdict(int)
    total_adj = total_turns = total_len = 0.0
    all_points: List[Point] = []

    for line in tqdm(lines, desc="Profiling", unit="line", disable=not progress):
        sequence = to_points(line, keyboard)
        all_points.extend(sequence.points)

        total_len += total_length(sequence)
        total_turns += turn_count(sequence, thresholds)
        total_adj += adjacency_ratio(sequence, thresholds)

        for p in sequence.points:
            used.add(p.key)
            key_freq[p.key] += 1

        lower = line.lower()
        for i in range(len(lower) - 1):
            g = lower[i:i + 2]
            if any(c.isspace() for c in g):
                continue
            bigram_freq[g] += 1

    n = len(lines)
    summary = ProfileSummary(
        layout=keyboard.name,
        line_count=n,
        top_keys=top_n(key_freq, top_keys),
        top_bigrams=top_n(bigram_freq, top_bigrams),
        suffix_patterns=summarize_suffixes(lines),
        prefix_patterns=summarize_prefixes(lines),
        zones=summarize_zones(all_points),
        avg_adjacency=total_adj / n,
        avg_turns=total_turns / n,
        avg_length=total_len / n,
        used_keys=frozenset(used),
        key_counts=dict(key_freq),
        bigram_counts=dict(bigram_freq),
    )
    logger.debug(
        "Profiled %d lines on '%s': %d keys used, avg adjacency %.2f.",
        n, keyboard.name, summary.unique_key_count, summary.avg_adjacency,
    )
    return summary
