"""Edit distance between name tokens."""

from typing import Optional

from rapidfuzz.distance import Levenshtein


def edit_distance(source: str, target: str, max_distance: Optional[int] = None) -> int:
    """
    Compute the Levenshtein distance between two strings.

    Insertions, deletions and substitutions each cost one. The result is
    symmetric: ``edit_distance(a, b) == edit_distance(b, a)``.

    Args:
        source: First string
        target: Second string
        max_distance: Optional upper bound. When the true distance exceeds it,
            ``max_distance + 1`` is returned instead, which lets the
            computation stop early.

    Returns:
        Minimum number of single-character edits turning ``source`` into ``target``
    """
    if max_distance is None:
        return Levenshtein.distance(source, target)
    if max_distance < 0:
        raise ValueError("max_distance must be non-negative")
    return Levenshtein.distance(source, target, score_cutoff=max_distance)


def within_distance(source: str, target: str, max_distance: int = 1) -> bool:
    """Return True if the two strings are at most ``max_distance`` edits apart."""
    # Lengths further apart than the bound can never be close enough.
    if abs(len(source) - len(target)) > max_distance:
        return False
    return edit_distance(source, target, max_distance) <= max_distance
