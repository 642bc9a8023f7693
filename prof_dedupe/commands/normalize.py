from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import Settings
from ..core.identity import ActionPlan
from ..loaders import load_records, load_roster
from .output import print_summary, write_plan


def run(
    settings: Settings,
    records_path: Path,
    roster_path: Path,
    *,
    out: Optional[Path] = None,
    fmt: Optional[str] = None,
) -> ActionPlan:
    records = load_records(records_path)
    roster = load_roster(roster_path, settings.output.roster_name_key)
    plan = settings.build_planner().plan_roster(records, roster)
    write_plan(plan, settings, out=out, fmt=fmt)
    print_summary(plan, len(records), out)
    return plan
