from __future__ import annotations

from typing import Any, List, Protocol, Sequence


class SheetGateway(Protocol):
    """Minimal row/cell access shared by every spreadsheet backend.

    Row numbers and cell addresses are 1-based A1 notation. Reading a sheet
    that does not exist returns an empty list.
    """

    def read_all_rows(self, sheet: str) -> List[List[Any]]:
        raise NotImplementedError

    def append_row(self, sheet: str, row: Sequence[Any]) -> int:
        raise NotImplementedError

    def write_cell(self, sheet: str, address: str, value: Any) -> None:
        raise NotImplementedError


def column_to_letter(col: int) -> str:
    """1 -> A, 26 -> Z, 27 -> AA."""
    if col < 1:
        raise ValueError(f"Column index must be >= 1, got {col}")
    letters = ""
    while col > 0:
        col, rem = divmod(col - 1, 26)
        letters = chr(65 + rem) + letters
    return letters


def row_range(row_number: int, width: int) -> str:
    return f"A{row_number}:{column_to_letter(width)}{row_number}"
