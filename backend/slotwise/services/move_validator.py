from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from slotwise.models.calendar import BREAK_PERIOD, Day, Period
from slotwise.models.instructor import Instructor
from slotwise.models.room import Room
from slotwise.models.session import Session


@dataclass(frozen=True)
class MoveValidation:
    valid: bool
    reason: str | None = None


ACCEPTED = MoveValidation(valid=True)


def validate_move(
    session: Session,
    day: Day,
    period: Period,
    sessions: Sequence[Session],
    instructors: Iterable[Instructor],
    rooms: Iterable[Room] = (),
) -> MoveValidation:
    """Check whether ``session`` may be relocated to ``(day, period)``.

    Rules are evaluated in a fixed order and the first failing one is reported.
    Nothing is mutated; committing the move is the caller's job. ``rooms`` is
    accepted so callers can pass the full domain snapshot; room occupancy is
    decided from the sessions alone.
    """
    instructor = next((item for item in instructors if item.id == session.instructor_id), None)
    if instructor is None:
        return MoveValidation(valid=False, reason="Instructor not found")
    if day not in instructor.working_days:
        return MoveValidation(valid=False, reason="Not a working day")
    if day == instructor.free_day:
        return MoveValidation(valid=False, reason="Free campus day")
    if period == BREAK_PERIOD and not instructor.can_teach_break:
        return MoveValidation(valid=False, reason="Cannot teach break")

    others = [item for item in sessions if item.id != session.id and item.day == day and item.period == period]
    if any(item.instructor_id == session.instructor_id for item in others):
        return MoveValidation(valid=False, reason="Instructor busy")
    if session.room_id is not None and any(item.room_id == session.room_id for item in others):
        return MoveValidation(valid=False, reason="Room occupied")
    return ACCEPTED
