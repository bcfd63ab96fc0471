"""Unit tests for the class status transition table."""

import pytest

from classroom.api.classes.lifecycle import can_transition, check_transition
from classroom.core.enums import ClassStatus
from classroom.core.exceptions import InvalidTransitionError


@pytest.mark.parametrize(
    "current, requested",
    [
        ("scheduled", "live"),
        ("scheduled", "cancelled"),
        ("live", "ended"),
    ],
)
def test_legal_edges(current: str, requested: str) -> None:
    assert can_transition(current, requested)
    assert check_transition(current, requested) == ClassStatus(requested)


@pytest.mark.parametrize(
    "current, requested",
    [
        ("scheduled", "scheduled"),
        ("scheduled", "ended"),
        ("live", "scheduled"),
        ("live", "cancelled"),
        ("live", "live"),
        ("ended", "live"),
        ("ended", "scheduled"),
        ("cancelled", "scheduled"),
        ("cancelled", "live"),
    ],
)
def test_illegal_edges(current: str, requested: str) -> None:
    assert not can_transition(current, requested)
    with pytest.raises(InvalidTransitionError) as exc_info:
        check_transition(current, requested)
    assert exc_info.value.status_code == 409
    assert exc_info.value.current == current
    assert exc_info.value.requested == requested


def test_unknown_status_is_never_legal() -> None:
    assert not can_transition("scheduled", "paused")
    assert not can_transition("archived", "live")
