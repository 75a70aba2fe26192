"""
String manipulation utilities.
"""
import re
from typing import Optional

from rapidfuzz.distance import Levenshtein

FEATURE_MARKER_PATTERN = re.compile(r"feat\.?|ft\.?")
NON_WORD_PATTERN = re.compile(r"[^\w\s]")


def normalize_string(text: Optional[str]) -> str:
    """
    Normalize a title or artist string for comparison purposes.

    Lowercases the text, drops "feat"/"ft" markers (with or without a trailing
    period), removes every character that is not a word character or
    whitespace, and trims the result.

    Args:
        text: Input string to normalize

    Returns:
        Normalized string
    """
    if not text:
        return ""

    text = text.lower()

    # Removing punctuation can join the letters of a new marker ("f.t"),
    # so repeat until nothing changes
    previous = None
    while text != previous:
        previous = text
        text = FEATURE_MARKER_PATTERN.sub("", text)
        text = NON_WORD_PATTERN.sub("", text)

    return text.strip()


def levenshtein_distance(first: str, second: str) -> int:
    """
    Calculate the Levenshtein (edit) distance between two strings.

    This is the minimum number of single-character insertions, deletions or
    substitutions needed to turn one string into the other.
    """
    return Levenshtein.distance(first, second)


def similarity(first: Optional[str], second: Optional[str]) -> float:
    """
    Calculate string similarity based on edit distance.

    Returns:
        A value between 0.0 (completely different) and 1.0 (identical)
    """
    if first is None or second is None:
        return 0.0

    longer = max(len(first), len(second))
    if longer == 0:
        return 1.0

    return (longer - levenshtein_distance(first, second)) / longer
