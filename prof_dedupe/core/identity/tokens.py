"""
Word-level name comparison.

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import re

# Anything that is not a letter, digit or whitespace ("_" is a word char in re).
_NON_WORD = re.compile(r"[^\w\s]|_")


def tokenize(name: str) -> list[str]:
    """
    Split a name into lowercase alphanumeric words.

    Examples:
        "Smith, John" → ["smith", "john"]
        "O'Brien  Kate" → ["obrien", "kate"]
        "Әлия Сейтқали" → ["әлия", "сейтқали"]

    Args:
        name: The name to split

    Returns:
        Words in their original order, empty ones dropped
    """
    if not name:
        return []
    cleaned = _NON_WORD.sub("", name.lower())
    return cleaned.split()


def sorted_words(name: str) -> str:
    return " ".join(sorted(tokenize(name)))


def words_swapped(a: str, b: str) -> bool:
    """
    True when both names consist of the same words in any order.

    Two names without any words never match each other.
    """
    key = sorted_words(a)
    return bool(key) and key == sorted_words(b)


def is_subset(a: str, b: str) -> bool:
    """
    True when every word of `a` also occurs in `b`.

    Callers only use this for names of two or more words; a single word
    would match every record that happens to contain it.
    """
    other = set(tokenize(b))
    return all(word in other for word in tokenize(a))
