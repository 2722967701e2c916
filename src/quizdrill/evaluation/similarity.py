"""
Edit-Distance Similarity

Levenshtein distance with a single rolling row, and the 0-100 similarity
percentage derived from it.
"""

import math


def levenshtein_distance(a: str, b: str) -> int:
    """
    Minimum number of single-character insertions, deletions and
    substitutions needed to turn ``a`` into ``b``.

    Time is O(len(a) * len(b)); memory is one row of ``len(b) + 1`` cells.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # row[j] holds the distance between the current prefix of a and b[:j]
    row = list(range(len(b) + 1))

    for i, char_a in enumerate(a, start=1):
        diagonal = row[0]
        row[0] = i

        for j, char_b in enumerate(b, start=1):
            above = row[j]
            cost = 0 if char_a == char_b else 1
            row[j] = min(
                above + 1,          # deletion
                row[j - 1] + 1,     # insertion
                diagonal + cost,    # substitution
            )
            diagonal = above

    return row[-1]


def round_percent(value: float) -> int:
    """Round half up to an integer percentage (87.5 -> 88)."""
    return int(math.floor(value + 0.5))


def similarity_percent(a: str, b: str) -> int:
    """
    Similarity of two strings as an integer between 0 and 100.

    100 means identical; two empty strings are a perfect match.
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100

    distance = levenshtein_distance(a, b)
    similarity = 1 - distance / max_len
    return round_percent(max(0.0, min(1.0, similarity)) * 100)
