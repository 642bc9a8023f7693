"""Edit distance between names, used to catch typos."""

from __future__ import annotations

import Levenshtein


def distance(a: str, b: str) -> int:
    """
    Levenshtein distance with unit costs over code points.

    Case-sensitive: callers lowercase both sides first.
    """
    return Levenshtein.distance(a, b)
