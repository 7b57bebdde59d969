import random

import pytest

from conftest import make_instructor
from slotwise.models.calendar import PERIOD_SEQUENCE, Day, Period
from slotwise.models.session import Session, SessionType
from slotwise.services.conflict_service import ConflictService
from slotwise.services.demo_data import demo_courses, demo_instructors, demo_rooms
from slotwise.services.move_validator import validate_move
from slotwise.services.placement import PlacementEngine


def make_session(session_id, **overrides):
    values = dict(
        id=session_id,
        course_id="c1",
        instructor_id="i1",
        room_id="r1",
        session_type=SessionType.lecture,
        day=Day.monday,
        period=Period.p1a,
    )
    values.update(overrides)
    return Session(**values)


@pytest.fixture
def instructors():
    return [make_instructor(), make_instructor(id="i2", name="Grace Hopper")]


def test_unknown_instructor_is_rejected(instructors):
    session = make_session("s1", instructor_id="ghost")

    check = validate_move(session, Day.tuesday, Period.p1a, [session], instructors)

    assert not check.valid
    assert check.reason == "Instructor not found"


@pytest.mark.parametrize(
    ("day", "period", "reason"),
    [
        (Day.saturday, Period.p1a, "Not a working day"),
        (Day.friday, Period.p1a, "Free campus day"),
        (Day.tuesday, Period.break_, "Cannot teach break"),
    ],
)
def test_instructor_rules(instructors, day, period, reason):
    session = make_session("s1")

    check = validate_move(session, day, period, [session], instructors)

    assert (check.valid, check.reason) == (False, reason)


def test_first_failing_rule_is_reported(instructors):
    session = make_session("s1")

    # Saturday at break breaks two rules; the working day rule comes first.
    check = validate_move(session, Day.saturday, Period.break_, [session], instructors)

    assert check.reason == "Not a working day"


def test_instructor_busy(instructors):
    session = make_session("s1")
    other = make_session("s2", room_id="r5", day=Day.tuesday, period=Period.p2a)

    check = validate_move(session, Day.tuesday, Period.p2a, [session, other], instructors)

    assert check.reason == "Instructor busy"


def test_room_occupied(instructors):
    session = make_session("s1")
    other = make_session("s2", instructor_id="i2", day=Day.tuesday, period=Period.p2a)

    check = validate_move(session, Day.tuesday, Period.p2a, [session, other], instructors)

    assert check.reason == "Room occupied"


def test_session_never_conflicts_with_itself(instructors):
    session = make_session("s1")

    check = validate_move(session, Day.monday, Period.p1a, [session], instructors)

    assert check.valid
    assert check.reason is None


def test_roomless_session_ignores_room_occupancy(instructors):
    session = make_session("s1", room_id=None)
    other = make_session("s2", instructor_id="i2", room_id=None, day=Day.tuesday)

    assert validate_move(session, Day.tuesday, Period.p1a, [session, other], instructors).valid


@pytest.mark.parametrize("seed", range(3))
def test_accepted_moves_never_introduce_conflicts(seed):
    instructors = demo_instructors()
    rooms = demo_rooms()
    sessions = PlacementEngine(
        courses=demo_courses(), instructors=instructors, rooms=rooms, rng=random.Random(seed)
    ).run().sessions
    session = sessions[0]

    for day in Day:
        for period in PERIOD_SEQUENCE:
            check = validate_move(session, day, period, sessions, instructors, rooms)
            if not check.valid:
                continue
            moved = [item.moved_to(day, period) if item.id == session.id else item for item in sessions]
            report = ConflictService(moved, instructors, rooms).detect_conflicts()
            assert report.conflicts == []
