import math
import re

import pytest

from classifier import build_coord_map
from points import to_points
from profiler import (
    PREFIX_RULES,
    SUFFIX_RULES,
    PatternRule,
    ZoneBias,
    analyze_profile,
    count_rule_matches,
    summarize_prefixes,
    summarize_suffixes,
    summarize_zones,
)

BASIC = ["Password123", "Welcome2024", "Admin123"]


def test_suffix_families():
    assert summarize_suffixes(BASIC) == [("year", 1), ("digit sequence", 3)]
    assert summarize_suffixes(["Tokyo2009!", "abc2026", "x2010"]) == [
        ("year", 1), ("digit sequence", 2), ("trailing !", 1),
    ]
    assert summarize_suffixes(["what??", "dots..", "a-_"]) == [
        ("trailing ?", 1), ("trailing -_. run", 2),
    ]


def test_prefix_families():
    assert summarize_prefixes(BASIC) == [("capitalized word", 3)]
    assert summarize_prefixes(["ABCdef", "hello1", "Tokyo2023!", "Hi1."]) == [
        ("capitalized word", 1),
        ("all-caps start", 1),
        ("all-lowercase start", 1),
        ("letters+digits+punctuation", 2),
    ]


def test_rule_tables_are_uniform():
    assert all(isinstance(r, PatternRule) for r in SUFFIX_RULES + PREFIX_RULES)
    extra = SUFFIX_RULES + (PatternRule("trailing #", re.compile(r"#+$")),)
    assert count_rule_matches(["abc##", "abc"], extra) == [("trailing #", 1)]


def test_profile_basic():
    summary = analyze_profile(BASIC, "qwerty")
    assert summary.line_count == 3
    assert summary.layout == "qwerty"
    assert dict(summary.suffix_patterns)["digit sequence"] == 3
    assert summary.top_keys[0] == ("2", 4)
    assert len(summary.top_keys) == 8
    assert len(summary.top_bigrams) == 5
    assert summary.top_bigrams[0] == ("12", 2)
    assert summary.unique_key_count == len(summary.used_keys)
    assert summary.key_counts["1"] == 2


def test_blank_lines_do_not_count():
    summary = analyze_profile(["", "   ", " abc ", "\t"], "qwerty")
    assert summary.line_count == 1
    assert summary.avg_length == pytest.approx(
        math.hypot(214, 78) + 120
    )


def test_top_n_ties_keep_first_seen_order():
    summary = analyze_profile(["abca"], "qwerty", top_keys=3)
    assert summary.top_keys == [("a", 2), ("b", 1), ("c", 1)]
    summary = analyze_profile(["abab", "cdcd"], "qwerty", top_bigrams=3)
    assert summary.top_bigrams == [("ab", 2), ("cd", 2), ("ba", 1)]


def test_bigrams_skip_whitespace_and_fold_case():
    summary = analyze_profile(["Ab aB"], "qwerty")
    assert summary.bigram_counts == {"ab": 2}


def test_averages():
    summary = analyze_profile(["qwe", "qa"], "qwerty")
    assert summary.avg_length == pytest.approx((120 + math.hypot(26, 78)) / 2)
    assert summary.avg_adjacency == pytest.approx(0.5)
    assert summary.avg_turns == 0


def test_used_keys_are_resolved():
    summary = analyze_profile(["Aa!"], "qwerty")
    assert summary.used_keys == frozenset({"a", "1"})


def test_empty_profile():
    summary = analyze_profile(["", "  "], "jis")
    assert summary.line_count == 0
    assert summary.layout == "jis"
    assert summary.top_keys == []
    assert summary.zones == ZoneBias()
    assert summary.avg_adjacency == summary.avg_turns == summary.avg_length == 0


def test_zones():
    kb = build_coord_map("qwerty")
    assert summarize_zones([]) == ZoneBias()
    zones = summarize_zones(to_points("1qaz", kb).points)
    assert zones == ZoneBias(left=0.5, right=0.5, top=0.5, middle=0.25, bottom=0.25)
    flat = summarize_zones(to_points("qp", kb).points)
    assert (flat.left, flat.right, flat.top) == (0.5, 0.5, 1.0)


def test_zone_fractions_sum_to_one():
    summary = analyze_profile(["qwerty12", "asdfgh34", "zxcvbn56"], "qwerty")
    z = summary.zones
    assert z.left + z.right == pytest.approx(1.0)
    assert z.top + z.middle + z.bottom == pytest.approx(1.0)


def test_progress_bar_is_optional():
    quiet = analyze_profile(BASIC, "qwerty")
    loud = analyze_profile(BASIC, "qwerty", progress=True)
    assert quiet == loud
