from __future__ import annotations

from datetime import date
from typing import Any

from ..common.datetime_utils import serial_to_date
from ..core.constants import MONTHS_RU

# Spreadsheet serial numbers in this window cover roughly 2009..2036.
SERIAL_MIN = 40000
SERIAL_MAX = 50000


def format_short_date(d: date) -> str:
    """Header style used on schedule sheets: ``20-янв``."""
    return f"{d.day}-{MONTHS_RU[d.month - 1]}"


def is_date_match(cell: Any, target: date) -> bool:
    """Whether a header cell denotes ``target``.

    Accepts ``20-янв`` / ``20.янв``, ``20.01.2026`` and serial date numbers.
    """
    if cell is None or cell == "":
        return False

    text = str(cell).strip().lower()
    short = format_short_date(target)
    if text in (short, short.replace("-", ".")):
        return True

    if text == target.strftime("%d.%m.%Y"):
        return True

    try:
        serial = float(text)
    except ValueError:
        return False
    if SERIAL_MIN < serial < SERIAL_MAX:
        return serial_to_date(serial) == target
    return False
