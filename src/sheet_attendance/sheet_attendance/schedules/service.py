from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Optional

from ..attendance.history import name_key
from ..core.constants import PRESENCE_MARK
from ..sheets.base import column_to_letter
from .date_match import format_short_date, is_date_match
from .repository import ScheduleGridRepository

logger = logging.getLogger(__name__)


def _find_employee_row(grid: List[List[Any]], employee_name: str) -> Optional[int]:
    wanted = name_key(employee_name)
    for i, row in enumerate(grid[1:], start=2):
        if row and name_key(row[0]) == wanted:
            return i
    return None


def _find_date_column(header: List[Any], today: date) -> Optional[int]:
    for j, cell in enumerate(header[1:], start=2):
        if is_date_match(cell, today):
            return j
    return None


class ScheduleSyncService:
    """Use case: put a presence mark on the worksite's schedule grid.

    The sheet is named after the worksite. Missing sheet, name or date column
    is a normal outcome (returns False), not an error.
    """

    def __init__(self, grids: ScheduleGridRepository, *, mark: Any = PRESENCE_MARK):
        self._grids = grids
        self._mark = mark

    def mark_present(self, *, worksite: str, employee_name: str, today: date) -> bool:
        grid = self._grids.read_grid(worksite)
        if len(grid) < 2:
            logger.info('Schedule sheet "%s" is empty or missing', worksite)
            return False

        row_number = _find_employee_row(grid, employee_name)
        if row_number is None:
            logger.info('Employee "%s" not found on schedule sheet "%s"', employee_name, worksite)
            return False

        col_number = _find_date_column(grid[0], today)
        if col_number is None:
            logger.info(
                'Date "%s" (%s) not found in the header of "%s"',
                format_short_date(today),
                today.isoformat(),
                worksite,
            )
            return False

        address = f"{column_to_letter(col_number)}{row_number}"
        self._grids.write_mark(worksite, address, self._mark)
        logger.info("Schedule updated: %s!%s = %s (%s)", worksite, address, self._mark, employee_name)
        return True
