"""Example: use the service layer directly (no Flask).

Prints the last mark of an employee: python examples/example_usage.py "Иванов Иван"
"""

import importlib
import sys

from dotenv import load_dotenv

from config import get_settings_module

from src.sheet_attendance.sheet_attendance.container import build_container


def main():
    load_dotenv(override=False)
    name = " ".join(sys.argv[1:]) or "Иванов Иван"
    settings = importlib.import_module(get_settings_module())
    container = build_container(sheets_config=settings.SHEETS_CONFIG)
    print(container.attendance_service.last_mark(name))
    print(len(container.roster_service.list_employees()), "employees on the roster")
    container.tasks.shutdown()


if __name__ == "__main__":
    main()
