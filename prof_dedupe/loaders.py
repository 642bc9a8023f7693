"""Read professor records and roster names from JSON exports."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .core.identity import InvalidInputError, NameRecord, validate_records, validate_roster

logger = logging.getLogger(__name__)


def _read_array(path: Path) -> list[Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"{path}: not valid JSON ({exc})") from exc
    if not isinstance(data, list):
        raise InvalidInputError(f"{path}: expected a JSON array, got {type(data).__name__}")
    return data


def load_records(path: Path) -> list[NameRecord]:
    """
    Load `[{"id": ..., "name": ...}, ...]`, e.g. a professors table export.

    Extra keys are ignored.
    """
    records = validate_records(_read_array(path))
    logger.info("Loaded %d records from %s", len(records), path)
    return records


def load_roster(path: Path, name_key: str = "teacherName") -> list[str]:
    """
    Load roster names.

    Entries may be plain strings or objects carrying the name under
    `name_key` (the teachers_data.json layout).
    """
    names: list[Any] = []
    for index, entry in enumerate(_read_array(path)):
        if isinstance(entry, dict):
            if name_key not in entry:
                raise InvalidInputError(f"{path}: roster entry #{index} has no {name_key!r}")
            names.append(entry[name_key])
        else:
            names.append(entry)
    roster = validate_roster(names)
    logger.info("Loaded %d roster names from %s", len(roster), path)
    return roster
