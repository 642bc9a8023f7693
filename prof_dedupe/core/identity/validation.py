"""
Input checks for a planning run.

Malformed input aborts the whole run: skipping a bad row silently could leave
later decisions pointing at the wrong record.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .models import NameRecord


class InvalidInputError(ValueError):
    """Raised when records or roster entries cannot be planned on."""


def _coerce(item: Any, index: int) -> NameRecord:
    if isinstance(item, NameRecord):
        record_id, name = item.id, item.raw_name
    elif isinstance(item, Mapping):
        if "id" not in item:
            raise InvalidInputError(f"Record #{index} has no id")
        record_id = item["id"]
        name = item.get("name", item.get("raw_name"))
    else:
        raise InvalidInputError(f"Record #{index} is not a record: {item!r}")

    if record_id is None or (isinstance(record_id, str) and not record_id.strip()):
        raise InvalidInputError(f"Record #{index} has an empty id")
    if not isinstance(name, str):
        raise InvalidInputError(
            f"Record #{index} (id={record_id!r}) has a non-string name: {name!r}"
        )
    if isinstance(item, NameRecord):
        return item
    return NameRecord(id=record_id, raw_name=name)


def validate_records(items: Iterable[Any]) -> list[NameRecord]:
    """
    Turn caller input into NameRecords, preserving order.

    Accepts NameRecord instances or mappings with `id` and `name` keys.

    Raises:
        InvalidInputError: on a missing id, a non-string name or a repeated id
    """
    records: list[NameRecord] = []
    seen: set[Any] = set()
    for index, item in enumerate(items):
        record = _coerce(item, index)
        try:
            duplicate = record.id in seen
        except TypeError as exc:
            raise InvalidInputError(
                f"Record #{index} has an unhashable id: {record.id!r}"
            ) from exc
        if duplicate:
            raise InvalidInputError(f"Duplicate record id {record.id!r} at #{index}")
        seen.add(record.id)
        records.append(record)
    return records


def validate_roster(names: Iterable[Any]) -> list[str]:
    """
    Check that every roster entry is a string.

    Raises:
        InvalidInputError: on a non-string entry
    """
    roster: list[str] = []
    for index, name in enumerate(names):
        if not isinstance(name, str):
            raise InvalidInputError(f"Roster entry #{index} is not a string: {name!r}")
        roster.append(name)
    return roster
