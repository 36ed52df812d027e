from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_timestamp
from ..common.validators import optional_text
from ..core.enums import Action, EmployeeStatus, PresenceState
from .model import Accept, Decision, Event, LastEvent, MarkProposal, Reject
from .transitions import next_state, presence_state

ACTION_LABELS = {Action.IN: "ПРИХОД", Action.OUT: "УХОД"}

_VALID_ACTIONS = {a.value for a in Action}
_VALID_STATUSES = {s.value for s in EmployeeStatus}


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def check_fields(proposal: MarkProposal) -> Optional[Reject]:
    """Rules that need no history: required fields, action and status values."""
    if any(_blank(v) for v in (proposal.employee_name, proposal.employee_status, proposal.action, proposal.worksite)):
        return Reject(
            reason="missing_fields",
            message="Не указаны обязательные поля: ФИО, Статус, Действие, Участок",
        )
    if proposal.action not in _VALID_ACTIONS:
        return Reject(reason="invalid_action", message='action должен быть "IN" или "OUT"')
    if proposal.employee_status not in _VALID_STATUSES:
        return Reject(reason="invalid_status", message='Статус должен быть "Штат" или "Аутсорсинг"')
    return None


def decide(
    last: LastEvent,
    proposal: MarkProposal,
    *,
    now: datetime,
    strict_first_action: bool = False,
) -> Decision:
    """Decide whether ``proposal`` may follow ``last`` for the same employee.

    Rules are checked in a fixed order: required fields, action value, status
    value, alternation against the last action, then (for OUT after IN) that
    status and worksite match the opening check-in. On acceptance the row is
    built with ``now`` as its timestamp.
    """
    rejected = check_fields(proposal)
    if rejected:
        return rejected

    action = Action(proposal.action)
    worksite = str(proposal.worksite).strip()
    current = presence_state(last)
    if next_state(current, action, strict_first_action=strict_first_action) is None:
        if current is None:
            return Reject(
                reason="no_prior_check_in",
                message=f'Нельзя отметить "{ACTION_LABELS[Action.OUT]}" без отметки "{ACTION_LABELS[Action.IN]}".',
            )
        other = Action.OUT if action == Action.IN else Action.IN
        return Reject(
            reason="duplicate_action",
            message=f'Нельзя отметить "{ACTION_LABELS[action]}" повторно. Сначала отметьте {ACTION_LABELS[other]}.',
        )

    if action == Action.OUT and current == PresenceState.PRESENT:
        if last.employee_status and proposal.employee_status != last.employee_status:
            return Reject(
                reason="status_mismatch",
                message=f'Статус должен совпадать с приходом. Вы пришли как "{last.employee_status}".',
            )
        if last.worksite and worksite != last.worksite:
            return Reject(
                reason="worksite_mismatch",
                message=f'Участок должен совпадать с приходом. Вы пришли на "{last.worksite}".',
            )

    event = Event(
        timestamp=format_timestamp(now),
        employee_name=str(proposal.employee_name).strip(),
        employee_status=str(proposal.employee_status),
        action=action.value,
        worksite=worksite,
        latitude=optional_text(proposal.geo.latitude),
        longitude=optional_text(proposal.geo.longitude),
        accuracy=optional_text(proposal.geo.accuracy),
    )
    return Accept(event=event)
