from __future__ import annotations

from typing import Any, List, Protocol


class ScheduleGridRepository(Protocol):
    """Per-worksite schedule sheets: names in column A, dates across row 1."""

    def read_grid(self, sheet: str) -> List[List[Any]]:
        raise NotImplementedError

    def write_mark(self, sheet: str, address: str, value: Any) -> None:
        raise NotImplementedError
