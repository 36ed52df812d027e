from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

from ..core.constants import EVENT_SOURCE


@dataclass(frozen=True)
class Event:
    """Одна строка листа Events (отметка прихода или ухода)."""

    timestamp: str
    employee_name: str
    employee_status: str
    action: str
    worksite: str
    source: str = EVENT_SOURCE
    latitude: str = ""
    longitude: str = ""
    accuracy: str = ""

    def to_row(self) -> List[str]:
        return [
            self.timestamp,
            self.employee_name,
            self.employee_status,
            self.action,
            self.worksite,
            self.source,
            self.latitude,
            self.longitude,
            self.accuracy,
        ]


@dataclass(frozen=True)
class LastEvent:
    """Read-model: the most recent event of one employee (all None when absent)."""

    action: Optional[str] = None
    employee_status: Optional[str] = None
    worksite: Optional[str] = None
    timestamp: Optional[str] = None

    @property
    def exists(self) -> bool:
        return self.action is not None


@dataclass(frozen=True)
class Geolocation:
    """Raw browser coordinates; stringified only when the row is built."""

    latitude: Any = ""
    longitude: Any = ""
    accuracy: Any = ""


@dataclass(frozen=True)
class MarkProposal:
    """What the client submitted; values are kept raw until validated."""

    employee_name: Optional[str]
    employee_status: Optional[str]
    action: Optional[str]
    worksite: Optional[str]
    geo: Geolocation = field(default_factory=Geolocation)


@dataclass(frozen=True)
class Accept:
    event: Event


@dataclass(frozen=True)
class Reject:
    reason: str
    message: str


Decision = Union[Accept, Reject]


@dataclass(frozen=True)
class EmployeeCode:
    """Row of the codes sheet used by the code-based mark variant."""

    code: str
    employee_name: str
    employee_status: str
    default_worksite: str = ""


@dataclass(frozen=True)
class MarkResult:
    """Outcome of an accepted mark.

    ``detached`` holds the futures of best-effort follow-up tasks; the mark is
    already committed whatever they resolve to.
    """

    event: Event
    row_number: int
    detached: Sequence[Future] = ()

    @property
    def timestamp(self) -> str:
        return self.event.timestamp
