from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.service import AttendanceService
from .attendance.sheet_event_repository import SheetEmployeeCodeRepository, SheetEventRepository
from .common.tasks import DetachedTasks, InlineTasks
from .core.constants import DEFAULT_TIMEZONE
from .employees.service import RosterService
from .employees.sheet_roster_repository import SheetRosterRepository
from .schedules.service import ScheduleSyncService
from .schedules.sheet_schedule_repository import SheetScheduleGridRepository
from .sheets.base import SheetGateway
from .sheets.connection import SheetsConfig, build_gateway


@dataclass(frozen=True)
class Container:
    gateway: SheetGateway
    tasks: DetachedTasks

    events_repo: SheetEventRepository
    roster_repo: SheetRosterRepository
    schedules_repo: SheetScheduleGridRepository
    codes_repo: Optional[SheetEmployeeCodeRepository]

    roster_service: RosterService
    schedule_sync_service: Optional[ScheduleSyncService]
    attendance_service: AttendanceService


def build_container(
    *,
    sheets_config: Optional[Mapping[str, Any]] = None,
    gateway: Optional[SheetGateway] = None,
    tasks: Optional[DetachedTasks] = None,
    timezone: str = DEFAULT_TIMEZONE,
    attendance_sync: bool = False,
    code_marks: bool = False,
    strict_first_action: bool = False,
    detached_workers: int = 4,
) -> Container:
    if gateway is None:
        gateway = build_gateway(SheetsConfig.from_mapping(sheets_config or {}))
    tasks = tasks or DetachedTasks(max_workers=detached_workers)

    events_repo = SheetEventRepository(gateway)
    roster_repo = SheetRosterRepository(gateway)
    schedules_repo = SheetScheduleGridRepository(gateway)
    codes_repo = SheetEmployeeCodeRepository(gateway) if code_marks else None

    roster_service = RosterService(roster_repo)
    schedule_sync_service = ScheduleSyncService(schedules_repo) if attendance_sync else None
    attendance_service = AttendanceService(
        events_repo,
        roster_service,
        schedule_sync_service,
        codes_repo,
        tasks=tasks,
        timezone=timezone,
        strict_first_action=strict_first_action,
    )

    return Container(
        gateway=gateway,
        tasks=tasks,
        events_repo=events_repo,
        roster_repo=roster_repo,
        schedules_repo=schedules_repo,
        codes_repo=codes_repo,
        roster_service=roster_service,
        schedule_sync_service=schedule_sync_service,
        attendance_service=attendance_service,
    )


def tasks_for(settings: Any) -> Optional[DetachedTasks]:
    """InlineTasks when the settings module asks for them (testing)."""
    if bool(getattr(settings, "INLINE_TASKS", False)):
        return InlineTasks()
    return None
