"""
Name matching rule cascade.

Rules are evaluated in a fixed priority order and the first one that fires
decides the verdict:

1. Exact normalized match
2. Case-insensitive exact match
3. Containment with extra words
4. Swapped words
5. Typo (Levenshtein distance)
6. Unambiguous partial name (roster mode only)

The order lives in `RULES` so it can be inspected and tested directly.
All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from .distance import distance
from .models import NO_MATCH, MatchReason, MatchVerdict, RosterMatch
from .normalizer import Normalizer
from .tokens import is_subset, tokenize, words_swapped

logger = logging.getLogger(__name__)

LEFT = "left"
RIGHT = "right"


@dataclass(frozen=True)
class PreparedName:
    """A name with its derived comparison forms computed once."""
    raw: str
    normalized: str
    lower: str
    tokens: tuple[str, ...]

    @classmethod
    def build(cls, raw: str, normalizer: Normalizer) -> "PreparedName":
        normalized = normalizer.normalize(raw)
        return cls(
            raw=raw,
            normalized=normalized,
            lower=normalized.lower(),
            tokens=tuple(tokenize(normalized)),
        )


@dataclass(frozen=True)
class Thresholds:
    max_typo_distance: int = 2
    min_typo_length: int = 5
    """Typo matches need the longer name to be strictly longer than this"""
    min_partial_tokens: int = 2


RuleCheck = Callable[[PreparedName, PreparedName, Thresholds], Optional[MatchVerdict]]


@dataclass(frozen=True)
class Rule:
    reason: MatchReason
    check: RuleCheck


def match_exact_normalized(a: PreparedName, b: PreparedName, t: Thresholds) -> Optional[MatchVerdict]:
    if a.normalized and a.normalized == b.normalized:
        return MatchVerdict(True, MatchReason.EXACT_NORMALIZED)
    return None


def match_case_insensitive(a: PreparedName, b: PreparedName, t: Thresholds) -> Optional[MatchVerdict]:
    if (a.lower and a.lower == b.lower) or (a.raw and a.raw.lower() == b.raw.lower()):
        return MatchVerdict(True, MatchReason.CASE_INSENSITIVE_EXACT)
    return None


def match_contains(a: PreparedName, b: PreparedName, t: Thresholds) -> Optional[MatchVerdict]:
    """
    One name is the other plus extra words or a suffix.

    Examples:
        "Asel Aitbayeva" vs "Asel Aitbayeva Nurkanovna" → contained side "left"
    """
    if not a.lower or not b.lower:
        return None
    if a.lower in b.lower and len(b.lower) > len(a.lower):
        return MatchVerdict(True, MatchReason.CONTAINS_EXTRA_WORDS, primary_side=LEFT)
    if b.lower in a.lower and len(a.lower) > len(b.lower):
        return MatchVerdict(True, MatchReason.CONTAINS_EXTRA_WORDS, primary_side=RIGHT)
    return None


def match_swapped(a: PreparedName, b: PreparedName, t: Thresholds) -> Optional[MatchVerdict]:
    if words_swapped(a.normalized, b.normalized):
        return MatchVerdict(True, MatchReason.SWAPPED_WORDS)
    return None


def match_typo(a: PreparedName, b: PreparedName, t: Thresholds) -> Optional[MatchVerdict]:
    """
    Small edit distance between reasonably long names.

    The length floor keeps short names like "Li" and "Lu" apart.
    """
    if max(len(a.normalized), len(b.normalized)) <= t.min_typo_length:
        return None
    dist = distance(a.lower, b.lower)
    if dist <= t.max_typo_distance:
        return MatchVerdict(True, MatchReason.TYPO, score=dist)
    return None


RULES: tuple[Rule, ...] = (
    Rule(MatchReason.EXACT_NORMALIZED, match_exact_normalized),
    Rule(MatchReason.CASE_INSENSITIVE_EXACT, match_case_insensitive),
    Rule(MatchReason.CONTAINS_EXTRA_WORDS, match_contains),
    Rule(MatchReason.SWAPPED_WORDS, match_swapped),
    Rule(MatchReason.TYPO, match_typo),
)

# Verdicts that settle a roster lookup on the spot.
_CERTAIN = frozenset(
    {
        MatchReason.EXACT_NORMALIZED,
        MatchReason.CASE_INSENSITIVE_EXACT,
        MatchReason.SWAPPED_WORDS,
    }
)


class MatchClassifier:
    """
    Decides whether two professor names refer to the same person.

    Usage:
        classifier = MatchClassifier()
        verdict = classifier.classify("Jon Smith", "John Smith")
        if verdict.is_match:
            print(verdict.describe())  # "typo (distance 1)"
    """

    def __init__(
        self,
        normalizer: Normalizer | None = None,
        thresholds: Thresholds | None = None,
        rules: Sequence[Rule] = RULES,
    ) -> None:
        self.normalizer = normalizer or Normalizer()
        self.thresholds = thresholds or Thresholds()
        self.rules = tuple(rules)

    def prepare(self, name: str) -> PreparedName:
        return PreparedName.build(name, self.normalizer)

    def classify_prepared(self, a: PreparedName, b: PreparedName) -> MatchVerdict:
        for rule in self.rules:
            verdict = rule.check(a, b, self.thresholds)
            if verdict is not None:
                return verdict
        return NO_MATCH

    def classify(self, a: str, b: str) -> MatchVerdict:
        """
        Run the pairwise cascade (rules 1-5) on two raw names.

        Args:
            a: First name, the primary in self-merge mode
            b: Second name

        Returns:
            The verdict of the first rule that fired, or a non-match
        """
        return self.classify_prepared(self.prepare(a), self.prepare(b))

    def classify_after(
        self, a: PreparedName, b: PreparedName, reason: MatchReason
    ) -> MatchVerdict:
        """Run only the rules that come after `reason` in the cascade."""
        reasons = [rule.reason for rule in self.rules]
        for rule in self.rules[reasons.index(reason) + 1:]:
            verdict = rule.check(a, b, self.thresholds)
            if verdict is not None:
                return verdict
        return NO_MATCH

    def is_partial_candidate(self, name: PreparedName) -> bool:
        return len(name.tokens) >= self.thresholds.min_partial_tokens

    def classify_against_roster(
        self, name: str | PreparedName, roster: Iterable[str | PreparedName]
    ) -> RosterMatch:
        """
        Find the roster entry a database name most likely refers to.

        Resolution order:
        1. Exact, case-insensitive or swapped-word verdicts stop the scan.
        2. Otherwise the best candidate wins: containment outranks typos,
           lower typo distance outranks higher, first-seen wins ties.
        3. Partial name: exactly one roster entry containing all words wins,
           several are ambiguous.

        Containment and partial matches are only considered for names with
        at least `min_partial_tokens` words so that "Asel" is never guessed.
        A pair refused by that guard still goes through the later rules, so
        "Ivanova" can match "Ivanov" as a typo.

        Args:
            name: Database name
            roster: Authoritative names in roster order

        Returns:
            RosterMatch; `roster_name` is None when nothing (or too much) matched
        """
        subject = name if isinstance(name, PreparedName) else self.prepare(name)
        partial_allowed = self.is_partial_candidate(subject)

        partial: list[PreparedName] = []
        best: tuple[tuple[int, int], PreparedName, MatchVerdict] | None = None

        for entry in roster:
            official = entry if isinstance(entry, PreparedName) else self.prepare(entry)
            verdict = self.classify_prepared(subject, official)

            if verdict.reason is MatchReason.CONTAINS_EXTRA_WORDS:
                shorter = subject if verdict.primary_side == LEFT else official
                if not self.is_partial_candidate(shorter):
                    verdict = self.classify_after(subject, official, verdict.reason)

            if verdict.is_match and verdict.reason in _CERTAIN:
                return RosterMatch(verdict=verdict, roster_name=official.raw)

            if verdict.is_match:
                rank = (0 if verdict.reason.is_exact_class else 1, verdict.score)
                if best is None or rank < best[0]:
                    best = (rank, official, verdict)

            if partial_allowed and is_subset(subject.normalized, official.normalized):
                partial.append(official)

        if best is not None:
            _, official, verdict = best
            return RosterMatch(verdict=verdict, roster_name=official.raw)

        if len(partial) == 1:
            return RosterMatch(
                verdict=MatchVerdict(True, MatchReason.UNAMBIGUOUS_PARTIAL),
                roster_name=partial[0].raw,
            )
        if len(partial) > 1:
            names = tuple(official.raw for official in partial)
            logger.debug("Ambiguous partial name %r: %s", subject.raw, names)
            return RosterMatch(ambiguous=True, candidates=names)

        return RosterMatch()
