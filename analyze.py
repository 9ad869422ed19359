import argparse
import dataclasses
import json
import logging
import sys
from enum import Enum
from typing import Any, List, Optional

from config import DEFAULT_THRESHOLDS, DEFAULT_WEIGHTS, load_thresholds, load_weights
from keywalk import SingleAnalysis, analyze_profile, analyze_single
from layouts import DEFAULT_LAYOUT, available_layouts
from patterns import describe
from profiler import TOP_BIGRAMS, TOP_KEYS, ProfileSummary
from utils import load_lines, split_lines, write_frequency_table


def setup_logging(verbose: bool = False) -> None:
    """Set up logging for the script."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Measure how strongly passwords follow keyboard walks"
    )
    parser.add_argument("--layout", type=str, choices=available_layouts(), default=DEFAULT_LAYOUT,
                        help="Keyboard layout to map characters onto")
    parser.add_argument("--thresholds", type=str, default=None,
                        help="JSON file overriding analysis thresholds")
    parser.add_argument("--weights", type=str, default=None,
                        help="JSON file overriding score weights and label cut-offs")
    parser.add_argument("--json", action="store_true",
                        help="Print the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    single = sub.add_parser("single", help="Analyze one password")
    single.add_argument("text", type=str, help="Password to analyze")

    profile = sub.add_parser("profile", help="Extract habits from many passwords, one per line")
    profile.add_argument("file", type=str, nargs="?", default=None,
                         help="File with one password per line (default: stdin)")
    profile.add_argument("--top_keys", type=int, default=TOP_KEYS,
                         help="Number of most frequent keys to report")
    profile.add_argument("--top_bigrams", type=int, default=TOP_BIGRAMS,
                         help="Number of most frequent bigrams to report")
    profile.add_argument("--freq_out", type=str, default=None,
                         help="Write key and bigram frequencies to this TSV file")
    profile.add_argument("--progress", action="store_true",
                         help="Show a progress bar")
    return parser.parse_args(argv)


def to_jsonable(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (frozenset, set)):
        return sorted(to_jsonable(v) for v in obj)
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    return obj


def format_single(result: SingleAnalysis) -> str:
    m = result.metrics
    lines = [
        f"layout: {result.layout}",
        f"unique keys: {m.unique_count}",
        f"path length: {round(m.total_length)}",
        f"turns: {m.turn_count}",
        f"adjacency: {m.adjacency_ratio * 100:.0f}%",
        f"direction entropy: {m.direction_entropy:.2f}",
        f"step CV: {m.step_cv:.2f}",
        f"knight moves: {m.knight_ratio * 100:.0f}%",
        f"dependency score: {result.score.value} ({result.score.label})",
        "findings:",
    ]
    lines.extend(f"  [{f.severity.value}] {describe(f)}" for f in result.findings)
    return "\n".join(lines)


def format_profile(summary: ProfileSummary) -> str:
    if summary.line_count == 0:
        return "No input."
    z = summary.zones
    lines = [
        f"layout: {summary.layout}",
        f"lines: {summary.line_count}",
        f"avg adjacency: {summary.avg_adjacency * 100:.0f}%",
        f"avg turns: {summary.avg_turns:.1f}",
        f"avg path length: {round(summary.avg_length)}",
        f"unique keys: {summary.unique_key_count}",
    ]
    if summary.top_keys:
        lines.append("frequent keys: " + " ".join(f"{k.upper()}×{v}" for k, v in summary.top_keys))
    if summary.top_bigrams:
        lines.append("frequent bigrams: " + ", ".join(f"{g}×{v}" for g, v in summary.top_bigrams))
    if summary.suffix_patterns:
        lines.append("suffix patterns: " + ", ".join(f"{n}×{c}" for n, c in summary.suffix_patterns))
    if summary.prefix_patterns:
        lines.append("prefix patterns: " + ", ".join(f"{n}×{c}" for n, c in summary.prefix_patterns))
    lines.append(
        f"zone bias: left {z.left * 100:.0f}% / right {z.right * 100:.0f}%, "
        f"top {z.top * 100:.0f}% / middle {z.middle * 100:.0f}% / bottom {z.bottom * 100:.0f}%"
    )
    return "\n".join(lines)


def run_profile(args: argparse.Namespace, thresholds) -> ProfileSummary:
    if args.file:
        lines = load_lines(args.file)
    else:
        lines = split_lines(sys.stdin.read())
    logging.info("Loaded %d passwords.", len(lines))
    summary = analyze_profile(
        lines,
        layout_name=args.layout,
        thresholds=thresholds,
        top_keys=args.top_keys,
        top_bigrams=args.top_bigrams,
        progress=args.progress,
    )
    if args.freq_out:
        write_frequency_table(
            [("key", summary.key_counts), ("bigram", summary.bigram_counts)], args.freq_out
        )
        logging.info("Frequencies written to '%s'.", args.freq_out)
    return summary


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    thresholds = DEFAULT_THRESHOLDS
    weights = DEFAULT_WEIGHTS
    try:
        if args.thresholds:
            thresholds = load_thresholds(args.thresholds)
            logging.info("Loaded thresholds from '%s'.", args.thresholds)
        if args.weights:
            weights = load_weights(args.weights)
            logging.info("Loaded score weights from '%s'.", args.weights)
        if args.command == "single":
            result = analyze_single(args.text, args.layout, thresholds, weights)
            text = format_single(result)
        else:
            result = run_profile(args, thresholds)
            text = format_profile(result)
    except (FileNotFoundError, ValueError) as e:
        logging.error("%s", e)
        sys.exit(1)
    except IOError as e:
        logging.error("I/O error: %s", e)
        sys.exit(1)

    if args.json:
        print(json.dumps(to_jsonable(result), indent=4, ensure_ascii=False))
    else:
        print(text)


if __name__ == "__main__":
    main()
