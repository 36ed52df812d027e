from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from src.sheet_attendance.sheet_attendance.attendance.history import find_last_event
from src.sheet_attendance.sheet_attendance.attendance.model import EmployeeCode, Event, Geolocation, LastEvent, MarkProposal
from src.sheet_attendance.sheet_attendance.attendance.service import AttendanceService
from src.sheet_attendance.sheet_attendance.common.tasks import InlineTasks
from src.sheet_attendance.sheet_attendance.core.exceptions import UpstreamError, ValidationError
from src.sheet_attendance.sheet_attendance.employees.service import RosterService

NOW = datetime(2026, 1, 20, 9, 0, 0, tzinfo=ZoneInfo("Europe/Moscow"))


class InMemoryEvents:
    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.reads = 0

    def read_all_rows(self):
        self.reads += 1
        return list(self.rows)

    def get_last_for_employee(self, employee_name: str) -> LastEvent:
        return find_last_event(self.read_all_rows(), employee_name)

    def append(self, event: Event) -> int:
        self.rows.append(event.to_row())
        return len(self.rows)


class FailingEvents(InMemoryEvents):
    def append(self, event: Event) -> int:
        raise UpstreamError("write failed", status_code=500)


class InMemoryRoster:
    def __init__(self, names=None):
        self.names = list(names or [])

    def list_names(self):
        return list(self.names)

    def append_name(self, name: str) -> int:
        self.names.append(name)
        return len(self.names) + 1


class BrokenRoster(InMemoryRoster):
    def list_names(self):
        raise UpstreamError("roster unavailable")


class RecordingScheduleSync:
    def __init__(self, *, fail: bool = False):
        self.calls = []
        self.fail = fail

    def mark_present(self, *, worksite: str, employee_name: str, today: date) -> bool:
        self.calls.append((worksite, employee_name, today))
        if self.fail:
            raise UpstreamError("schedule sheet locked")
        return True


class InMemoryCodes:
    def __init__(self, codes):
        self._codes = {c.code: c for c in codes}

    def get_by_code(self, code: str) -> Optional[EmployeeCode]:
        return self._codes.get(code.strip())


def make_service(events=None, roster=None, schedule_sync=None, codes=None, **kwargs):
    events = events if events is not None else InMemoryEvents()
    roster = roster if roster is not None else InMemoryRoster()
    svc = AttendanceService(
        events,
        RosterService(roster),
        schedule_sync,
        codes,
        tasks=InlineTasks(),
        clock=lambda: NOW,
        **kwargs,
    )
    return svc, events, roster


def proposal(action="IN", status="Штат", worksite="Склад", name="Иванов Иван"):
    return MarkProposal(employee_name=name, employee_status=status, action=action, worksite=worksite)


def test_mark_appends_row_and_adds_new_employee():
    svc, events, roster = make_service()

    result = svc.mark(proposal(name="иванов   иван"))

    assert result.timestamp == "20.01.2026, 09:00:00"
    assert result.row_number == 1
    assert events.rows[0][1] == "иванов   иван"
    assert roster.names == ["Иванов Иван"]
    assert all(f.result() is True for f in result.detached)


def test_rejected_mark_writes_nothing():
    svc, events, roster = make_service()
    svc.mark(proposal("IN"))

    with pytest.raises(ValidationError) as exc:
        svc.mark(proposal("IN"))

    assert exc.value.reason == "duplicate_action"
    assert len(events.rows) == 1


def test_invalid_fields_do_not_read_history():
    svc, events, _ = make_service()

    with pytest.raises(ValidationError) as exc:
        svc.mark(proposal(action="MAYBE"))

    assert exc.value.reason == "invalid_action"
    assert events.reads == 0


def test_padded_worksite_round_trips_from_check_in_to_check_out():
    svc, events, _ = make_service()

    svc.mark(proposal("IN", worksite="Склад "))
    result = svc.mark(proposal("OUT", worksite="Склад "))

    assert result.event.worksite == "Склад"
    assert [row[4] for row in events.rows] == ["Склад", "Склад"]


def test_out_must_match_check_in_status():
    svc, _, _ = make_service()
    svc.mark(proposal("IN"))

    with pytest.raises(ValidationError) as exc:
        svc.mark(proposal("OUT", status="Аутсорсинг"))

    assert exc.value.reason == "status_mismatch"
    assert svc.mark(proposal("OUT")).event.action == "OUT"


def test_schedule_sync_runs_only_on_check_in():
    sync = RecordingScheduleSync()
    svc, _, _ = make_service(schedule_sync=sync)

    svc.mark(proposal("IN"))
    svc.mark(proposal("OUT"))

    assert sync.calls == [("Склад", "Иванов Иван", date(2026, 1, 20))]


def test_detached_failures_do_not_affect_committed_mark():
    sync = RecordingScheduleSync(fail=True)
    svc, events, _ = make_service(roster=BrokenRoster(), schedule_sync=sync)

    result = svc.mark(proposal("IN"))

    assert len(events.rows) == 1
    assert result.event.action == "IN"
    assert [f.result() for f in result.detached] == [False, False]


def test_append_failure_propagates_and_skips_follow_ups():
    sync = RecordingScheduleSync()
    svc, _, roster = make_service(events=FailingEvents(), schedule_sync=sync)

    with pytest.raises(UpstreamError):
        svc.mark(proposal("IN"))

    assert sync.calls == []
    assert roster.names == []


def test_known_employee_is_not_added_twice():
    svc, _, roster = make_service(roster=InMemoryRoster(["ФИО", "Иванов Иван"]))

    svc.mark(proposal("IN", name="ИВАНОВ  иван"))

    assert roster.names == ["ФИО", "Иванов Иван"]


def test_strict_mode_rejects_first_out():
    svc, _, _ = make_service(strict_first_action=True)

    with pytest.raises(ValidationError) as exc:
        svc.mark(proposal("OUT"))

    assert exc.value.reason == "no_prior_check_in"


def test_last_mark_requires_name():
    svc, _, _ = make_service()

    with pytest.raises(ValidationError):
        svc.last_mark("   ")


def test_last_mark_after_marks():
    svc, _, _ = make_service()
    svc.mark(proposal("IN"))

    last = svc.last_mark("иванов иван")

    assert last.action == "IN"
    assert last.worksite == "Склад"


def test_mark_by_code_uses_codes_sheet_defaults():
    codes = InMemoryCodes([EmployeeCode(code="1042", employee_name="Петров Пётр", employee_status="Аутсорсинг", default_worksite="Упаковка")])
    svc, events, _ = make_service(codes=codes)

    result = svc.mark_by_code("1042", "IN", geo=Geolocation(latitude="55.1"))

    assert result.event.employee_name == "Петров Пётр"
    assert result.event.worksite == "Упаковка"
    assert events.rows[0][6] == "55.1"

    result = svc.mark_by_code("1042", "OUT", worksite="Упаковка")
    assert result.event.action == "OUT"


def test_mark_by_unknown_code():
    svc, _, _ = make_service(codes=InMemoryCodes([]))

    with pytest.raises(ValidationError) as exc:
        svc.mark_by_code("9999", "IN")

    assert exc.value.reason == "unknown_code"


def test_mark_by_code_disabled():
    svc, _, _ = make_service()

    with pytest.raises(ValidationError) as exc:
        svc.mark_by_code("1042", "IN")

    assert exc.value.reason == "codes_disabled"
