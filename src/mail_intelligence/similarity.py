"""
Character-level string similarity based on Levenshtein distance.

Internal helper for duplicate detection and recipient mining; not part of
the package's public surface.
"""

from typing import Optional


def levenshtein_distance(first: str, second: str) -> int:
    """Minimum number of single-character edits turning first into second."""
    if len(first) < len(second):
        first, second = second, first

    previous = list(range(len(second) + 1))
    for i, first_char in enumerate(first, start=1):
        current = [i]
        for j, second_char in enumerate(second, start=1):
            cost = 0 if first_char == second_char else 1
            current.append(min(
                current[j - 1] + 1,
                previous[j] + 1,
                previous[j - 1] + cost
            ))
        previous = current
    return previous[-1]


def string_similarity(first: str, second: str) -> float:
    """
    Normalized similarity in [0, 1].

    Comparison is exact; callers lower-case both sides first when they want
    case-insensitive matching. Two empty strings are identical.
    """
    max_length = max(len(first), len(second))
    if max_length == 0:
        return 1.0
    return 1 - levenshtein_distance(first, second) / max_length


def field_similarity(first: Optional[str], second: Optional[str]) -> Optional[float]:
    """
    Case-insensitive similarity of two optional field values.

    Returns:
        Similarity score, or None when either side is missing or empty
    """
    if not first or not second:
        return None
    return string_similarity(first.lower(), second.lower())
