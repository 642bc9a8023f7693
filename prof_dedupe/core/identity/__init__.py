"""
Professor name reconciliation domain logic.

This module handles:
- Name normalization and tokenization
- Edit distance for typo detection
- The ordered match rule cascade (pairwise and against a roster)
- Planning merge/rename/delete actions without conflicts

All logic is pure business logic with no I/O dependencies.
"""

from __future__ import annotations

from .distance import distance
from .matching import RULES, MatchClassifier, PreparedName, Rule, Thresholds
from .models import (
    Action,
    ActionKind,
    ActionPlan,
    MatchReason,
    MatchVerdict,
    NameRecord,
    RosterMatch,
    SkippedRecord,
)
from .normalizer import Normalizer, normalize
from .planner import DecisionPlanner, is_placeholder, plan_roster, plan_self_merge
from .tokens import is_subset, tokenize, words_swapped
from .validation import InvalidInputError, validate_records, validate_roster

__all__ = [
    "Action",
    "ActionKind",
    "ActionPlan",
    "DecisionPlanner",
    "InvalidInputError",
    "MatchClassifier",
    "MatchReason",
    "MatchVerdict",
    "NameRecord",
    "Normalizer",
    "PreparedName",
    "RULES",
    "RosterMatch",
    "Rule",
    "SkippedRecord",
    "Thresholds",
    "distance",
    "is_placeholder",
    "is_subset",
    "normalize",
    "plan_roster",
    "plan_self_merge",
    "tokenize",
    "validate_records",
    "validate_roster",
    "words_swapped",
]
