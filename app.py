"""Entry point: ``python app.py`` or ``flask --app app:create_app run``."""

from src.sheet_attendance.sheet_attendance.main import create_app, run

__all__ = ["create_app"]

if __name__ == "__main__":
    run()
