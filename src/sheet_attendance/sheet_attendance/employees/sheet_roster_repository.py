from __future__ import annotations

from typing import List

from ..common.validators import optional_text
from ..core.constants import ROSTER_SHEET
from ..sheets.base import SheetGateway
from .repository import RosterRepository


class SheetRosterRepository(RosterRepository):
    """Single-column roster sheet with a header in row 1."""

    def __init__(self, gateway: SheetGateway, *, sheet: str = ROSTER_SHEET):
        self._gateway = gateway
        self._sheet = sheet

    def list_names(self) -> List[str]:
        rows = self._gateway.read_all_rows(self._sheet)
        names = []
        for r in rows[1:]:
            value = optional_text(r[0]).strip() if r else ""
            if value:
                names.append(value)
        return names

    def append_name(self, name: str) -> int:
        return self._gateway.append_row(self._sheet, [name])
