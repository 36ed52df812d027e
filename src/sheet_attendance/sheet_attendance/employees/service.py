from __future__ import annotations

import logging
from typing import List

from .repository import RosterRepository
from .roster import is_valid_name, normalize_name

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: keep the employee roster (autocomplete list) up to date.

    The check-then-append in ``add_if_new`` is not atomic against the sheet:
    two first-time marks for the same new name can race and both append.
    """

    def __init__(self, roster: RosterRepository):
        self._roster = roster

    def list_employees(self) -> List[str]:
        try:
            return self._roster.list_names()
        except Exception:
            logger.exception("Could not read the employee roster")
            return []

    def add_if_new(self, employee_name: str) -> bool:
        normalized = normalize_name(employee_name)
        if not is_valid_name(normalized):
            logger.info("Name rejected by roster validation: %r", employee_name)
            return False

        existing = {normalize_name(n).lower() for n in self._roster.list_names()}
        if normalized.lower() in existing:
            return False

        self._roster.append_name(normalized)
        logger.info("New employee added to roster: %s", normalized)
        return True
