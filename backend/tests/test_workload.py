import pytest

from conftest import make_instructor
from slotwise.models.calendar import Day, Period
from slotwise.models.session import Session, SessionType
from slotwise.services.workload import assigned_hours, build_workload_report, hours_for_sessions, workload_status


def sessions_for(instructor_id, count):
    periods = [Period.p1a, Period.p1b, Period.p2a, Period.p2b, Period.p3a, Period.p3b]
    return [
        Session(
            id=f"{instructor_id}-{index}",
            course_id="c1",
            instructor_id=instructor_id,
            room_id="r1",
            session_type=SessionType.lecture,
            day=Day.monday,
            period=periods[index % len(periods)],
        )
        for index in range(count)
    ]


@pytest.mark.parametrize(("count", "hours"), [(0, 0), (1, 0.8), (2, 1.7), (3, 2.5), (12, 10.0)])
def test_hours_for_sessions_rounds_to_one_decimal(count, hours):
    assert hours_for_sessions(count) == hours


def test_assigned_hours_counts_only_that_instructor():
    sessions = sessions_for("i1", 3) + sessions_for("i2", 2)
    assert assigned_hours("i1", sessions) == 2.5


@pytest.mark.parametrize(
    ("assigned", "maximum", "status"),
    [(0, 10, "idle"), (5, 10, "ok"), (10, 10, "ok"), (10.5, 10, "overloaded")],
)
def test_workload_status(assigned, maximum, status):
    assert workload_status(assigned, maximum) == status


def test_build_workload_report_flags_overload():
    instructors = [make_instructor(max_hours_per_week=1), make_instructor(id="i2", name="Idle")]

    report = build_workload_report(instructors, sessions_for("i1", 2))

    assert [(item.instructor_id, item.assigned_hours, item.status) for item in report] == [
        ("i1", 1.7, "overloaded"),
        ("i2", 0, "idle"),
    ]
