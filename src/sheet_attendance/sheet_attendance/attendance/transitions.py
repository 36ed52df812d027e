from __future__ import annotations

from typing import Optional

from ..core.enums import Action, PresenceState
from .model import LastEvent

_TRANSITIONS = {
    (PresenceState.AWAY, Action.IN): PresenceState.PRESENT,
    (PresenceState.PRESENT, Action.OUT): PresenceState.AWAY,
}


def presence_state(last: LastEvent) -> Optional[PresenceState]:
    """Presence implied by the last recorded action.

    None means there is no usable history (never marked, or the last row holds
    something other than IN/OUT after a manual edit).
    """
    if last.action == Action.IN.value:
        return PresenceState.PRESENT
    if last.action == Action.OUT.value:
        return PresenceState.AWAY
    return None


def next_state(
    current: Optional[PresenceState],
    action: Action,
    *,
    strict_first_action: bool = False,
) -> Optional[PresenceState]:
    """Apply ``action`` to ``current``; returns None when the transition is illegal.

    Without history the employee is treated as AWAY only in strict mode,
    otherwise any first action is allowed.
    """
    if current is None:
        if not strict_first_action:
            return PresenceState.PRESENT if action == Action.IN else PresenceState.AWAY
        current = PresenceState.AWAY
    return _TRANSITIONS.get((current, action))
