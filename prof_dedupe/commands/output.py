from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import Settings
from ..core.identity import ActionPlan
from ..render import render

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SummaryLine:
    label: str
    count: int
    detail: Optional[str] = None

    def render(self) -> str:
        if self.detail:
            return f"=> {self.label}: {self.count} ({self.detail})"
        return f"=> {self.label}: {self.count}"


def summary_lines(plan: ActionPlan, analyzed: int) -> list[str]:
    lines = [SummaryLine("Analyzed records", analyzed).render()]
    if plan.deletes:
        lines.append(SummaryLine("Delete operations", plan.deletes, "placeholders").render())
    lines.append(SummaryLine("Merge operations", plan.merges).render())
    if plan.renames:
        lines.append(SummaryLine("Rename operations", plan.renames).render())
    if plan.skipped:
        by_reason: dict[str, int] = {}
        for skip in plan.skipped:
            by_reason[skip.reason] = by_reason.get(skip.reason, 0) + 1
        detail = ", ".join(f"{reason}: {count}" for reason, count in sorted(by_reason.items()))
        lines.append(SummaryLine("Ignored records", plan.ignored, detail).render())
    return lines


def write_plan(
    plan: ActionPlan,
    settings: Settings,
    *,
    out: Optional[Path] = None,
    fmt: Optional[str] = None,
) -> None:
    text = render(plan, settings.output, fmt)
    if out is None:
        sys.stdout.write(text)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    logger.debug("Wrote plan to %s", out)


def print_summary(plan: ActionPlan, analyzed: int, out: Optional[Path]) -> None:
    # Keep stdout clean when the plan itself goes there.
    stream = sys.stdout if out is not None else sys.stderr
    for line in summary_lines(plan, analyzed):
        print(line, file=stream)
    if out is not None:
        print(f"=> Wrote plan to: {out}", file=stream)
