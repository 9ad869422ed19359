import os
import re
from typing import Dict, Iterable, List, Tuple

##########################################################################
# Input Loading and Output Helpers
##########################################################################
_NEWLINES = re.compile(r"\n+")


def split_lines(text: str) -> List[str]:
    """Split on runs of newlines, trim every line and drop the blank ones."""
    return [s.strip() for s in _NEWLINES.split(text or "") if s.strip()]


def load_lines(file_path: str) -> List[str]:
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Cannot find file: {file_path}")
    with open(file_path, "r", encoding="utf-8") as f:
        return split_lines(f.read())


def top_n(freq: Dict[str, int], n: int) -> List[Tuple[str, int]]:
    # sorted() is stable, so ties keep first-seen order
    return sorted(freq.items(), key=lambda item: item[1], reverse=True)[:n]


def write_frequency_table(tables: Iterable[Tuple[str, Dict[str, int]]], output_file: str) -> None:
    """
    Writes frequency tables to a TSV file.
    Each line is formatted as:
      kind<tab>ngram<tab>frequency
    Within each kind, entries are sorted by frequency (highest first).
    """
    with open(output_file, "w", encoding="utf-8") as f:
        for kind, freq in tables:
            for gram, count in top_n(freq, len(freq)):
                f.write(f"{kind}\t{gram}\t{count}\n")
