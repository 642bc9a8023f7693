"""
Name normalization.

Produces the canonical comparison form of a professor name: trailing
language/course tags removed ("Aitbayeva Asel - CHIN" -> "Aitbayeva Asel")
and whitespace collapsed. Case is left untouched; comparisons lowercase
explicitly where they need to.
"""

from __future__ import annotations

import re

# A dash-like separator followed by 2-5 letters and, optionally, trailing text
# (e.g. "- ger", "– ITA 2", "-CHIN group B").
DEFAULT_SUFFIX_PATTERN = r"\s*[-‐‑–—]\s*[A-Za-z]{2,5}(\s+.*)?$"

_WHITESPACE = re.compile(r"\s+")


class Normalizer:
    """
    Normalizes names for comparison.

    Usage:
        normalizer = Normalizer()
        normalizer.normalize("  Smith   John - ENG ")  # "Smith John"
    """

    def __init__(self, suffix_pattern: str = DEFAULT_SUFFIX_PATTERN) -> None:
        self.suffix_pattern = suffix_pattern
        self._suffix = re.compile(suffix_pattern, re.IGNORECASE | re.DOTALL)

    def strip_suffix(self, name: str) -> str:
        """Remove one trailing language/course tag, if present."""
        return self._suffix.sub("", name, count=1)

    def collapse_whitespace(self, name: str) -> str:
        return _WHITESPACE.sub(" ", name).strip()

    def normalize(self, name: str) -> str:
        """
        Return the comparison form of a name.

        Stripping repeats until nothing changes so that a tag uncovered by
        the previous strip ("Asel - ab- CD") is removed as well; this keeps
        normalize(normalize(x)) == normalize(x).

        Args:
            name: Raw name

        Returns:
            Suffix-free, whitespace-collapsed name with the original casing
        """
        if not name:
            return ""

        current = self.collapse_whitespace(name)
        while True:
            stripped = self.collapse_whitespace(self.strip_suffix(current))
            if stripped == current:
                return current
            current = stripped


_default = Normalizer()


def normalize(name: str) -> str:
    """Normalize a name with the default suffix pattern."""
    return _default.normalize(name)
