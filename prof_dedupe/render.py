"""
Plan rendering.

Turns an ActionPlan into something a reviewer reads before anything is
executed: a PL/pgSQL script or a JSON document. Rendering never runs
anything against a database.
"""

from __future__ import annotations

import json
from typing import Any

from .config import OutputSettings
from .core.identity import Action, ActionKind, ActionPlan
from .core.identity.planner import MODE_ROSTER

RULE = "-- " + "=" * 78

HEADERS = {
    MODE_ROSTER: [
        "AUTO-GENERATED NORMALIZATION SCRIPT",
        RULE,
        "Updates misspelled professor names to match the official roster.",
        "If the correctly spelled professor already exists, the typo is MERGED into it.",
        "Otherwise the typo is RENAMED to the correct name.",
        "",
        "PLEASE REVIEW ALL SUGGESTED CHANGES BEFORE RUNNING.",
    ],
}
DEFAULT_HEADER = [
    "AUTO-GENERATED CLEANUP AND MERGE SCRIPT",
    RULE,
    "Deletes placeholder rows and merges duplicate professors into their primary.",
    "",
    "PLEASE REVIEW ALL SUGGESTED CHANGES BEFORE RUNNING.",
]


def sql_literal(value: Any) -> str:
    """Single-quoted SQL string literal with quotes doubled."""
    return "'" + str(value).replace("'", "''") + "'"


def _comment(text: str) -> str:
    return " ".join(str(text).split())


def _render_action(action: Action, output: OutputSettings) -> list[str]:
    source = sql_literal(action.source_id)
    lines: list[str] = []
    if action.kind is ActionKind.DELETE:
        lines.append(f"    -- Deleting placeholder: {_comment(action.source_name)}")
        lines.append(f"    -- Reason: {action.reason}")
        lines.append(f"    DELETE FROM {output.table} WHERE id = {source};")
    elif action.kind is ActionKind.MERGE:
        lines.append(f'    -- DB Name: "{_comment(action.source_name)}" -> Merging into: "{_comment(action.target_name)}"')
        lines.append(f"    -- Reason: {action.reason}")
        lines.append(
            "    RAISE NOTICE 'Merging \"%\" into \"%\"', "
            f"{sql_literal(action.source_name)}, {sql_literal(action.target_name)};"
        )
        lines.append(
            f"    PERFORM {output.merge_function}({sql_literal(action.target_id)}, {source});"
        )
    else:
        lines.append(f'    -- DB Name: "{_comment(action.source_name)}"')
        lines.append(f'    -- Official Name: "{_comment(action.target_name)}"')
        lines.append(f"    -- Reason: {action.reason}")
        lines.append(
            "    RAISE NOTICE 'Renaming \"%\" to \"%\"', "
            f"{sql_literal(action.source_name)}, {sql_literal(action.target_name)};"
        )
        lines.append(
            f"    UPDATE {output.table} SET name = {sql_literal(action.target_name)} "
            f"WHERE id = {source};"
        )
    return lines


def render_sql(plan: ActionPlan, output: OutputSettings | None = None) -> str:
    """
    Render the plan as a single `DO $$ ... END $$;` block.

    Actions keep their plan order, so renames land before any merge that
    targets the renamed record.
    """
    output = output or OutputSettings()
    lines = [RULE]
    for line in HEADERS.get(plan.mode, DEFAULT_HEADER):
        lines.append(line if line == RULE else f"-- {line}".rstrip())
    lines.append(RULE)
    summary = plan.summary()
    lines.append(
        "-- Summary: "
        + ", ".join(f"{key}={value}" for key, value in summary.items())
    )
    lines.append("")
    lines.append("DO $$")
    lines.append("BEGIN")
    if not plan.actions:
        lines.append("    -- Nothing to do.")
        lines.append("    NULL;")
    for action in plan.actions:
        lines.append("")
        lines.extend(_render_action(action, output))
    lines.append("")
    lines.append("END $$;")
    return "\n".join(lines) + "\n"


def render_json(plan: ActionPlan) -> str:
    return json.dumps(plan.to_dict(), indent=2, ensure_ascii=False, default=str) + "\n"


def render(plan: ActionPlan, output: OutputSettings | None = None, fmt: str | None = None) -> str:
    output = output or OutputSettings()
    fmt = fmt or output.format
    if fmt == "json":
        return render_json(plan)
    if fmt == "sql":
        return render_sql(plan, output)
    raise ValueError(f"Unknown output format: {fmt}")
