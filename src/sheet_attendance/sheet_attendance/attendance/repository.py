from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import EmployeeCode, Event, LastEvent


class EventRepository(Protocol):
    """Repository interface for the event log (Events sheet).

    Note (DIP): services depend on this interface, not on a concrete spreadsheet backend.
    """

    def read_all_rows(self) -> Sequence[Sequence[Any]]:
        raise NotImplementedError

    def get_last_for_employee(self, employee_name: str) -> LastEvent:
        raise NotImplementedError

    def append(self, event: Event) -> int:
        """Append one event; returns the 1-based row number it landed on."""

        raise NotImplementedError


class EmployeeCodeRepository(Protocol):
    def get_by_code(self, code: str) -> Optional[EmployeeCode]:
        raise NotImplementedError
