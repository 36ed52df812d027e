from __future__ import annotations

from typing import Any, Optional, Sequence

from .model import LastEvent


def _cell(row: Sequence[Any], index: int) -> Optional[str]:
    if index >= len(row):
        return None
    value = row[index]
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def name_key(name: Any) -> str:
    """Comparison key for employee names: trimmed, case-folded, single-spaced."""
    return " ".join(str(name or "").split()).lower()


def find_last_event(rows: Sequence[Sequence[Any]], employee_name: str) -> LastEvent:
    """Scan the event log from the bottom and return the newest row for ``employee_name``.

    The log is append-only, so physical row order is the only ordering there is.
    A header row never matches a real name and needs no special handling.
    """
    target = name_key(employee_name)
    if not target:
        return LastEvent()

    for row in reversed(rows):
        name = _cell(row, 1)
        if name and name_key(name) == target:
            return LastEvent(
                action=_cell(row, 3),
                employee_status=_cell(row, 2),
                worksite=_cell(row, 4),
                timestamp=_cell(row, 0),
            )
    return LastEvent()
