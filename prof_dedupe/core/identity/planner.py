"""
Decision planner - turns pairwise verdicts into a reviewable action plan.

Two strategies:
- Self-merge: deduplicate one list of records against itself.
- Roster reconciliation: fix database names against an authoritative roster.

Responsibilities:
- Routing placeholder rows ("Vacancy") to deletes
- Choosing primaries and duplicates
- Deciding between rename and merge for roster matches
- Guaranteeing no record is consumed by more than one action

Nothing here touches a database; executing the plan is the caller's job.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from .matching import MatchClassifier, PreparedName
from .models import (
    SKIP_AMBIGUOUS,
    SKIP_CLEAN,
    SKIP_NO_MATCH,
    Action,
    ActionKind,
    ActionPlan,
    NameRecord,
    SkippedRecord,
)
from .validation import validate_records, validate_roster

logger = logging.getLogger(__name__)

MODE_SELF_MERGE = "self_merge"
MODE_ROSTER = "roster"

DEFAULT_PLACEHOLDERS = ("vacancy",)


def is_placeholder(name: str, patterns: Iterable[str]) -> bool:
    """True when the name marks an empty slot rather than a person."""
    lowered = name.lower()
    return any(pattern.lower() in lowered for pattern in patterns if pattern)


class DecisionPlanner:
    """
    Builds action plans from professor records.

    Usage:
        planner = DecisionPlanner()
        plan = planner.plan_self_merge(records)
        for action in plan.actions:
            print(action.kind.value, action.source_id, action.reason)
    """

    def __init__(
        self,
        classifier: MatchClassifier | None = None,
        placeholder_patterns: Sequence[str] = DEFAULT_PLACEHOLDERS,
    ) -> None:
        self.classifier = classifier or MatchClassifier()
        self.placeholder_patterns = tuple(placeholder_patterns)

    def plan_self_merge(self, records: Iterable[Any]) -> ActionPlan:
        """
        Deduplicate a list of records against itself.

        Placeholders are deleted first. The rest are ordered by normalized
        name length (stable), so shorter names become primaries; suffixes and
        extra words usually mark the non-canonical copy. Each primary absorbs
        every later, unconsumed record it matches.

        Args:
            records: NameRecords or {"id", "name"} mappings, in input order

        Returns:
            ActionPlan with deletes followed by merges in scan order

        Raises:
            InvalidInputError: if any record is malformed
        """
        validated = validate_records(records)
        plan = ActionPlan(mode=MODE_SELF_MERGE)

        candidates: list[tuple[NameRecord, PreparedName]] = []
        for record in validated:
            if is_placeholder(record.raw_name, self.placeholder_patterns):
                logger.info("Delete placeholder %r (id=%s)", record.raw_name, record.id)
                plan.actions.append(
                    Action(
                        kind=ActionKind.DELETE,
                        source_id=record.id,
                        source_name=record.raw_name,
                        reason="placeholder name",
                    )
                )
                continue
            candidates.append((record, self.classifier.prepare(record.raw_name)))

        candidates.sort(key=lambda item: len(item[1].normalized))

        consumed: set[Any] = set()
        for i, (primary, prepared_primary) in enumerate(candidates):
            if primary.id in consumed:
                continue
            consumed.add(primary.id)

            for duplicate, prepared_duplicate in candidates[i + 1:]:
                if duplicate.id in consumed:
                    continue
                verdict = self.classifier.classify_prepared(prepared_primary, prepared_duplicate)
                if not verdict.is_match:
                    continue

                consumed.add(duplicate.id)
                reason = verdict.describe()
                logger.info(
                    "Merge %r into %r (%s)", duplicate.raw_name, primary.raw_name, reason
                )
                plan.actions.append(
                    Action(
                        kind=ActionKind.MERGE,
                        source_id=duplicate.id,
                        source_name=duplicate.raw_name,
                        target_id=primary.id,
                        target_name=primary.raw_name,
                        reason=reason,
                    )
                )

        logger.debug(
            "Self-merge plan: %d merges, %d deletes from %d records",
            plan.merges,
            plan.deletes,
            len(validated),
        )
        return plan

    def plan_roster(self, records: Iterable[Any], roster: Iterable[Any]) -> ActionPlan:
        """
        Reconcile database names against an authoritative roster.

        Per record, in input order:
        1. Name already on the roster: left alone ("clean").
        2. Case-insensitive roster hit: fixed to the roster's casing.
        3. Otherwise the roster cascade picks at most one roster name.
        4. Nothing confident: left alone ("ambiguous" / "no confident match").

        A fixed name becomes a MERGE when another record already carries it
        (including a record renamed earlier in this plan), else a RENAME.

        Args:
            records: NameRecords or {"id", "name"} mappings
            roster: Authoritative names

        Returns:
            ActionPlan in input order, with skipped records documented

        Raises:
            InvalidInputError: if any record or roster entry is malformed
        """
        validated = validate_records(records)
        official_names = validate_roster(roster)
        plan = ActionPlan(mode=MODE_ROSTER)

        official_set = set(official_names)
        by_lower: dict[str, str] = {}
        for name in official_names:
            by_lower.setdefault(name.lower(), name)
        prepared_roster = [self.classifier.prepare(name) for name in official_names]

        # name -> id of the record that holds (or will hold) that exact name
        holders: dict[str, Any] = {}
        for record in validated:
            holders.setdefault(record.raw_name, record.id)

        for record in validated:
            name = record.raw_name

            if name in official_set:
                plan.skipped.append(SkippedRecord(record.id, name, SKIP_CLEAN))
                continue

            official = by_lower.get(name.lower())
            if official is not None:
                reason = "case-insensitive match"
            else:
                match = self.classifier.classify_against_roster(name, prepared_roster)
                if match.roster_name is None:
                    skip = SKIP_AMBIGUOUS if match.ambiguous else SKIP_NO_MATCH
                    log = logger.info if match.ambiguous else logger.debug
                    log("Ignored %r (id=%s): %s", name, record.id, skip)
                    plan.skipped.append(
                        SkippedRecord(record.id, name, skip, candidates=match.candidates)
                    )
                    continue
                official = match.roster_name
                reason = match.verdict.describe(left="DB name", right="official name")

            plan.actions.append(self._resolve(record, official, reason, holders))

        logger.debug(
            "Roster plan: %d renames, %d merges, %d ignored of %d records",
            plan.renames,
            plan.merges,
            plan.ignored,
            len(validated),
        )
        return plan

    def _resolve(
        self, record: NameRecord, official: str, reason: str, holders: dict[str, Any]
    ) -> Action:
        holder = holders.get(official)
        if holder is not None and holder != record.id:
            logger.info("Merge %r into existing %r (%s)", record.raw_name, official, reason)
            return Action(
                kind=ActionKind.MERGE,
                source_id=record.id,
                source_name=record.raw_name,
                target_id=holder,
                target_name=official,
                reason=reason,
            )

        logger.info("Rename %r to %r (%s)", record.raw_name, official, reason)
        holders[official] = record.id
        return Action(
            kind=ActionKind.RENAME,
            source_id=record.id,
            source_name=record.raw_name,
            target_name=official,
            reason=reason,
        )


def plan_self_merge(
    records: Iterable[Any],
    classifier: MatchClassifier | None = None,
    placeholder_patterns: Sequence[str] = DEFAULT_PLACEHOLDERS,
) -> ActionPlan:
    """Convenience wrapper around DecisionPlanner.plan_self_merge."""
    return DecisionPlanner(classifier, placeholder_patterns).plan_self_merge(records)


def plan_roster(
    records: Iterable[Any],
    roster: Iterable[Any],
    classifier: MatchClassifier | None = None,
) -> ActionPlan:
    """Convenience wrapper around DecisionPlanner.plan_roster."""
    return DecisionPlanner(classifier).plan_roster(records, roster)
