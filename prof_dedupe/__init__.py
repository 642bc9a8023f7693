"Professor name deduplication and roster reconciliation."

from importlib import metadata

from .core.identity import (
    Action,
    ActionKind,
    ActionPlan,
    DecisionPlanner,
    InvalidInputError,
    MatchClassifier,
    MatchReason,
    MatchVerdict,
    NameRecord,
    distance,
    is_subset,
    normalize,
    plan_roster,
    plan_self_merge,
    tokenize,
    words_swapped,
)

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
    "__version__",
    "distance",
    "is_subset",
    "normalize",
    "plan_roster",
    "plan_self_merge",
    "tokenize",
    "words_swapped",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("prof-dedupe")
        except metadata.PackageNotFoundError:  # pragma: no cover - during editable dev installs
            return "0.0.0"
    raise AttributeError(name)
