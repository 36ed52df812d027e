from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from ..common.datetime_utils import now_local
from ..common.tasks import DetachedTasks
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import Action
from ..core.exceptions import ValidationError
from ..employees.service import RosterService
from ..schedules.service import ScheduleSyncService
from .model import Accept, Geolocation, LastEvent, MarkProposal, MarkResult
from .repository import EmployeeCodeRepository, EventRepository
from .validator import check_fields, decide

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: record a check-in / check-out.

    Only the history read and the event append sit on the request path. The
    roster upsert and the schedule-sheet mark run as detached tasks after the
    append; their failure never undoes or rejects the mark.

    There is no lock across requests: two simultaneous INs for one employee can
    both see the same last event and both be written.
    """

    def __init__(
        self,
        events: EventRepository,
        roster: RosterService,
        schedule_sync: Optional[ScheduleSyncService] = None,
        codes: Optional[EmployeeCodeRepository] = None,
        *,
        tasks: DetachedTasks,
        timezone: str = DEFAULT_TIMEZONE,
        strict_first_action: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._events = events
        self._roster = roster
        self._schedule_sync = schedule_sync
        self._codes = codes
        self._tasks = tasks
        self._strict_first_action = bool(strict_first_action)
        self._clock = clock or (lambda: now_local(timezone))

    def last_mark(self, employee_name: Optional[str]) -> LastEvent:
        if not employee_name or not employee_name.strip():
            raise ValidationError("Не указано ФИО сотрудника", reason="missing_fields")
        return self._events.get_last_for_employee(employee_name)

    def mark(self, proposal: MarkProposal) -> MarkResult:
        rejected = check_fields(proposal)
        if rejected:
            raise ValidationError(rejected.message, reason=rejected.reason)

        last = self._events.get_last_for_employee(str(proposal.employee_name))
        now = self._clock()
        decision = decide(last, proposal, now=now, strict_first_action=self._strict_first_action)
        if not isinstance(decision, Accept):
            raise ValidationError(decision.message, reason=decision.reason)

        event = decision.event
        row_number = self._events.append(event)
        logger.info("Mark saved: %s %s (%s, %s)", event.action, event.employee_name, event.employee_status, event.worksite)

        detached: List = []
        if event.action == Action.IN.value and self._schedule_sync is not None:
            detached.append(
                self._tasks.submit(
                    "schedule-sync",
                    self._schedule_sync.mark_present,
                    worksite=event.worksite,
                    employee_name=event.employee_name,
                    today=now.date(),
                )
            )
        detached.append(self._tasks.submit("roster-upsert", self._roster.add_if_new, event.employee_name))

        return MarkResult(event=event, row_number=row_number, detached=tuple(detached))

    def mark_by_code(
        self,
        employee_code: Optional[str],
        action: Optional[str],
        *,
        worksite: Optional[str] = None,
        geo: Optional[Geolocation] = None,
    ) -> MarkResult:
        """Code-based variant: resolve name/status (and default worksite) from the codes sheet."""
        if self._codes is None:
            raise ValidationError("Отметка по коду не настроена", reason="codes_disabled")
        code = require_non_empty(employee_code, "Код сотрудника")

        employee = self._codes.get_by_code(code)
        if employee is None:
            raise ValidationError("Неизвестный код сотрудника", reason="unknown_code")

        proposal = MarkProposal(
            employee_name=employee.employee_name,
            employee_status=employee.employee_status,
            action=action,
            worksite=worksite if worksite and str(worksite).strip() else employee.default_worksite,
            geo=geo or Geolocation(),
        )
        return self.mark(proposal)
