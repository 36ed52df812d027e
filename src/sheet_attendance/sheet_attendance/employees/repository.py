from __future__ import annotations

from typing import List, Protocol


class RosterRepository(Protocol):
    def list_names(self) -> List[str]:
        """Names from the roster column, header excluded, blanks dropped."""

        raise NotImplementedError

    def append_name(self, name: str) -> int:
        raise NotImplementedError
