"""
Class status state machine.

    scheduled -> live -> ended
    scheduled -> cancelled

ended and cancelled are terminal. Self-transitions are rejected.
"""
from typing import Dict, FrozenSet, Union

from classroom.core.enums import ClassStatus
from classroom.core.exceptions import InvalidTransitionError

ALLOWED_TRANSITIONS: Dict[ClassStatus, FrozenSet[ClassStatus]] = {
    ClassStatus.SCHEDULED: frozenset({ClassStatus.LIVE, ClassStatus.CANCELLED}),
    ClassStatus.LIVE: frozenset({ClassStatus.ENDED}),
    ClassStatus.ENDED: frozenset(),
    ClassStatus.CANCELLED: frozenset(),
}


def can_transition(current: Union[ClassStatus, str], requested: Union[ClassStatus, str]) -> bool:
    try:
        current = ClassStatus(current)
        requested = ClassStatus(requested)
    except ValueError:
        return False
    return requested in ALLOWED_TRANSITIONS[current]


def check_transition(current: Union[ClassStatus, str], requested: Union[ClassStatus, str]) -> ClassStatus:
    """Return the requested status, or raise InvalidTransitionError for an illegal edge."""
    if not can_transition(current, requested):
        raise InvalidTransitionError(_value(current), _value(requested))
    return ClassStatus(requested)


def _value(status: Union[ClassStatus, str]) -> str:
    return status.value if isinstance(status, ClassStatus) else str(status)
