from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from ..common.validators import optional_text
from ..core.constants import CODES_SHEET, EVENTS_SHEET
from ..sheets.base import SheetGateway
from .history import find_last_event, name_key
from .model import EmployeeCode, Event, LastEvent
from .repository import EmployeeCodeRepository, EventRepository

logger = logging.getLogger(__name__)


class SheetEventRepository(EventRepository):
    def __init__(self, gateway: SheetGateway, *, sheet: str = EVENTS_SHEET):
        self._gateway = gateway
        self._sheet = sheet

    def read_all_rows(self) -> Sequence[Sequence[Any]]:
        return self._gateway.read_all_rows(self._sheet)

    def get_last_for_employee(self, employee_name: str) -> LastEvent:
        return find_last_event(self.read_all_rows(), employee_name)

    def append(self, event: Event) -> int:
        row_number = self._gateway.append_row(self._sheet, event.to_row())
        logger.info("Event written to %s row %s", self._sheet, row_number)
        return row_number


class SheetEmployeeCodeRepository(EmployeeCodeRepository):
    """Codes sheet: code | full name | status | default worksite, header in row 1."""

    def __init__(self, gateway: SheetGateway, *, sheet: str = CODES_SHEET):
        self._gateway = gateway
        self._sheet = sheet

    def get_by_code(self, code: str) -> Optional[EmployeeCode]:
        wanted = name_key(code)
        if not wanted:
            return None

        rows: List[List[Any]] = self._gateway.read_all_rows(self._sheet)
        for r in rows[1:]:
            cells = [optional_text(c).strip() for c in r] + [""] * 4
            if cells[0] and name_key(cells[0]) == wanted:
                return EmployeeCode(
                    code=cells[0],
                    employee_name=cells[1],
                    employee_status=cells[2],
                    default_worksite=cells[3],
                )
        return None
