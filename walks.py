"""
walks.py – Detect keyboard walks: runs of three or more characters in which
every consecutive pair of keys is adjacent on the keyboard.
"""

from typing import List, Optional, Sequence

from classifier import Classifier, Point
from config import DEFAULT_THRESHOLDS, Thresholds

MIN_WALK_POINTS = 3


def build_adjacency_graph(
    points: Sequence[Point], thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> List[List[int]]:
    """
    Adjacency lists over point indices: i and j are linked when their keys are
    within the adjacency thresholds, regardless of their distance in the input.
    Quadratic in the number of points.
    """
    classifier = Classifier(thresholds)
    adj: List[List[int]] = [[] for _ in range(len(points))]
    for i in range(len(points)):
        for j in range(i + 1, len(points)):
            if classifier.is_adjacent(points[i], points[j]):
                adj[i].append(j)
                adj[j].append(i)
    return adj


def walk_runs(
    points: Sequence[Point], thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> List[range]:
    """
    Maximal runs of consecutively adjacent points, as ranges of point indices.
    Only runs spanning at least three points are returned; runs never overlap.
    """
    classifier = Classifier(thresholds)
    runs: List[range] = []
    start: Optional[int] = None
    for i in range(1, len(points)):
        if classifier.is_adjacent(points[i - 1], points[i]):
            if start is None:
                start = i - 1
            continue
        if start is not None and i - start >= MIN_WALK_POINTS:
            runs.append(range(start, i))
        start = None
    if start is not None and len(points) - start >= MIN_WALK_POINTS:
        runs.append(range(start, len(points)))
    return runs


def detect_walks(
    chars: Sequence[str],
    points: Sequence[Point],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> List[str]:
    """
    Return the substrings of `chars` covered by each walk, left to right.

    A walk is sliced by the input indices of its first and last point, so the
    result is always a contiguous piece of the original text.
    """
    text = "".join(chars)
    walks = []
    for run in walk_runs(points, thresholds):
        first, last = points[run[0]], points[run[-1]]
        walks.append(text[first.index:last.index + 1])
    return walks
