from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE, TIMESTAMP_FORMAT

# Day zero of spreadsheet serial dates (accounts for the 1900 leap-year bug).
SERIAL_EPOCH = date(1899, 12, 30)


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current wall-clock time in the deployment timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(ZoneInfo(tz_name))


def format_timestamp(value: datetime) -> str:
    """Format as DD.MM.YYYY, HH:MM:SS."""
    return value.strftime(TIMESTAMP_FORMAT)


def serial_to_date(serial: float) -> date:
    return SERIAL_EPOCH + timedelta(days=int(serial))
