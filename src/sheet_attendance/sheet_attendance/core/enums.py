from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """Тип отметки: приход (IN) или уход (OUT)."""

    IN = "IN"
    OUT = "OUT"


class EmployeeStatus(str, Enum):
    """Статус сотрудника, записываемый в каждую отметку."""

    STAFF = "Штат"
    OUTSOURCED = "Аутсорсинг"


class PresenceState(str, Enum):
    """Per-employee presence derived from the last recorded action."""

    AWAY = "AWAY"
    PRESENT = "PRESENT"
