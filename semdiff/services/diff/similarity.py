"""Character-level similarity scoring for modified-line pairing."""

from __future__ import annotations

from semdiff.services.diff.lcs import lcs_length
from semdiff.services.diff.tokenize import split_chars


def string_similarity(a: str, b: str) -> float:
    """
    Dice-style similarity of two strings over their character LCS.

    Returns a float in [0.0, 1.0] where 1.0 = identical. Two empty strings
    are identical; one empty string against a non-empty one scores 0.0.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    common = lcs_length(split_chars(a), split_chars(b))
    return min(1.0, max(0.0, 2 * common / (len(a) + len(b))))
