from __future__ import annotations

from typing import Any, List

from ..sheets.base import SheetGateway
from .repository import ScheduleGridRepository


class SheetScheduleGridRepository(ScheduleGridRepository):
    def __init__(self, gateway: SheetGateway):
        self._gateway = gateway

    def read_grid(self, sheet: str) -> List[List[Any]]:
        return self._gateway.read_all_rows(sheet)

    def write_mark(self, sheet: str, address: str, value: Any) -> None:
        self._gateway.write_cell(sheet, address, value)
