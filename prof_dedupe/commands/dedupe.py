from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import Settings
from ..core.identity import ActionPlan
from ..loaders import load_records
from .output import print_summary, write_plan


def run(
    settings: Settings,
    records_path: Path,
    *,
    out: Optional[Path] = None,
    fmt: Optional[str] = None,
) -> ActionPlan:
    records = load_records(records_path)
    plan = settings.build_planner().plan_self_merge(records)
    write_plan(plan, settings, out=out, fmt=fmt)
    print_summary(plan, len(records), out)
    return plan
