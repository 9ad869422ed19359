import argparse
from typing import List, Optional, Tuple

from keywalk import analyze_single
from layouts import DEFAULT_LAYOUT, available_layouts


def get_layout_score(text: str, layout_name: str) -> int:
    return analyze_single(text, layout_name).score.value


def compare_layouts(text: str, baseline: str = DEFAULT_LAYOUT) -> List[Tuple[str, int, int]]:
    """
    Score `text` on every registered layout.
    Returns (layout, score, difference from the baseline layout's score).
    """
    baseline_score = get_layout_score(text, baseline)
    rows = []
    for layout_name in available_layouts():
        score = get_layout_score(text, layout_name)
        rows.append((layout_name, score, score - baseline_score))
    return rows


def print_layout_scores(text: str, baseline: str = DEFAULT_LAYOUT) -> None:
    rows = compare_layouts(text, baseline)
    print(f"{text!r}")
    for layout_name, score, delta in rows:
        if layout_name == baseline:
            print(f"  {layout_name} score: {score} (baseline)")
        else:
            print(f"  {layout_name} score: {score} (difference from {baseline}: {delta:+d})")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Compare the keyboard dependency score of passwords across layouts."
    )
    parser.add_argument("texts", nargs="+", help="Passwords to compare")
    parser.add_argument("--baseline", choices=available_layouts(), default=DEFAULT_LAYOUT,
                        help="Layout the other scores are compared against")
    args = parser.parse_args(argv)

    for text in args.texts:
        print_layout_scores(text, args.baseline)


if __name__ == "__main__":
    main()
