"""
Domain models for professor name reconciliation.

These are pure data models with no dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class NameRecord:
    """
    A professor row as supplied by the caller.

    Example:
        NameRecord(id="6f1c...", raw_name="Aitbayeva Asel - CHIN")
    """
    id: Any
    """Opaque identifier; identity of the record"""

    raw_name: str
    """Name exactly as stored, never modified by the engine"""


class MatchReason(Enum):
    """Rule of the match cascade that produced a verdict."""
    EXACT_NORMALIZED = "exact_normalized"
    CASE_INSENSITIVE_EXACT = "case_insensitive_exact"
    CONTAINS_EXTRA_WORDS = "contains_extra_words"
    SWAPPED_WORDS = "swapped_words"
    TYPO = "typo"
    UNAMBIGUOUS_PARTIAL = "unambiguous_partial"

    @property
    def is_exact_class(self) -> bool:
        return self is not MatchReason.TYPO and self is not MatchReason.UNAMBIGUOUS_PARTIAL


@dataclass(frozen=True)
class MatchVerdict:
    """
    Result of comparing two names.

    Contains information about whether they match and why.
    """
    is_match: bool
    """Whether the two names refer to the same professor"""

    reason: Optional[MatchReason] = None
    """The rule that fired, None when nothing matched"""

    score: int = 0
    """Edit distance for TYPO verdicts, 0 otherwise"""

    primary_side: Optional[str] = None
    """For CONTAINS_EXTRA_WORDS: "left" or "right", whichever name is contained"""

    def describe(self, left: str = "primary", right: str = "duplicate") -> str:
        """
        Human-readable justification used in logs and rendered plans.

        Args:
            left: Label for the first name given to the classifier
            right: Label for the second name given to the classifier
        """
        if not self.is_match or self.reason is None:
            return "no match"
        if self.reason is MatchReason.EXACT_NORMALIZED:
            return "exact normalized match"
        if self.reason is MatchReason.CASE_INSENSITIVE_EXACT:
            return "case-insensitive match"
        if self.reason is MatchReason.CONTAINS_EXTRA_WORDS:
            longer = left if self.primary_side == "right" else right
            return f"{longer} has extra words/suffix"
        if self.reason is MatchReason.SWAPPED_WORDS:
            return "swapped words"
        if self.reason is MatchReason.TYPO:
            return f"typo (distance {self.score})"
        return "unambiguous partial name match"


NO_MATCH = MatchVerdict(is_match=False)


@dataclass(frozen=True)
class RosterMatch:
    """Outcome of matching one name against a whole roster."""
    verdict: MatchVerdict = NO_MATCH
    roster_name: Optional[str] = None
    ambiguous: bool = False
    candidates: tuple[str, ...] = ()
    """Roster names that competed when the match was ambiguous"""


class ActionKind(Enum):
    DELETE = "delete"
    MERGE = "merge"
    RENAME = "rename"


@dataclass(frozen=True)
class Action:
    """
    A proposed change for human review.

    MERGE folds source_id into target_id, RENAME sets source_id's name to
    target_name, DELETE removes source_id.
    """
    kind: ActionKind
    source_id: Any
    source_name: str
    reason: str
    target_id: Any = None
    target_name: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.kind.value,
            "source_id": self.source_id,
            "source_name": self.source_name,
            "target_id": self.target_id,
            "target_name": self.target_name,
            "reason": self.reason,
        }


SKIP_CLEAN = "clean"
SKIP_AMBIGUOUS = "ambiguous"
SKIP_NO_MATCH = "no confident match"


@dataclass(frozen=True)
class SkippedRecord:
    record_id: Any
    name: str
    reason: str
    candidates: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.record_id, "name": self.name, "reason": self.reason}
        if self.candidates:
            data["candidates"] = list(self.candidates)
        return data


@dataclass
class ActionPlan:
    """
    Ordered decisions of one planning run.

    `actions` holds the decisions; `skipped` only documents records that were
    left alone so a reviewer can see why.
    """
    mode: str
    actions: list[Action] = field(default_factory=list)
    skipped: list[SkippedRecord] = field(default_factory=list)

    def _count(self, kind: ActionKind) -> int:
        return sum(1 for action in self.actions if action.kind is kind)

    @property
    def merges(self) -> int:
        return self._count(ActionKind.MERGE)

    @property
    def renames(self) -> int:
        return self._count(ActionKind.RENAME)

    @property
    def deletes(self) -> int:
        return self._count(ActionKind.DELETE)

    @property
    def matched(self) -> int:
        return self.merges + self.renames

    @property
    def ignored(self) -> int:
        return len(self.skipped)

    def summary(self) -> dict[str, int]:
        return {
            "merges": self.merges,
            "renames": self.renames,
            "deletes": self.deletes,
            "matched": self.matched,
            "ignored": self.ignored,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "summary": self.summary(),
            "actions": [action.to_dict() for action in self.actions],
            "skipped": [skip.to_dict() for skip in self.skipped],
        }
