from __future__ import annotations

from ..config import Settings
from ..core.identity import MatchVerdict


def run(settings: Settings, name_a: str, name_b: str) -> MatchVerdict:
    classifier = settings.build_classifier()
    left = classifier.prepare(name_a)
    right = classifier.prepare(name_b)
    verdict = classifier.classify_prepared(left, right)
    print(f"A: {name_a!r} -> {left.normalized!r}")
    print(f"B: {name_b!r} -> {right.normalized!r}")
    if not verdict.is_match:
        print("Match: none")
        return verdict
    print(f"Match: {verdict.describe(left='A', right='B')}")
    print(f"Rule: {verdict.reason.value}")
    return verdict
