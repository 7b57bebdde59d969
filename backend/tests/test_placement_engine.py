import random
from collections import Counter

import pytest

from conftest import make_course, make_instructor
from slotwise.models.calendar import BREAK_PERIOD, DOUBLE_PERIOD_STARTS, Day, pair_partner
from slotwise.models.room import Room, RoomType
from slotwise.models.session import SessionType, required_room_type
from slotwise.services.conflict_service import ConflictService
from slotwise.services.demo_data import demo_courses, demo_instructors, demo_rooms
from slotwise.services.placement import FailureReason, PlacementEngine, summarize_failures


def run_engine(scenario, seed, current_schedule=(), preserve_locked=True):
    engine = PlacementEngine(rng=random.Random(seed), **scenario)
    return engine.run(current_schedule, preserve_locked=preserve_locked)


@pytest.mark.parametrize("seed", range(20))
def test_single_course_places_pair_and_single_without_conflicts(scenario, seed):
    result = run_engine(scenario, seed)

    assert len(result.sessions) == 3
    assert result.failures == []
    report = ConflictService(result.sessions, scenario["instructors"], scenario["rooms"]).detect_conflicts()
    assert report.conflicts == []

    lectures = [item for item in result.sessions if item.session_type == SessionType.lecture]
    assert len(lectures) == 2
    first, second = lectures
    assert first.day == second.day
    assert first.instructor_id == second.instructor_id
    assert first.room_id == second.room_id
    starts = [item for item in lectures if item.period in DOUBLE_PERIOD_STARTS]
    assert len(starts) == 1
    partner = pair_partner(starts[0].period)
    assert {item.period for item in lectures} == {starts[0].period, partner}


@pytest.mark.parametrize("seed", range(5))
def test_load_cap_rejects_pair_but_admits_single(scenario, seed):
    scenario["instructors"] = [make_instructor(max_hours_per_week=0.5)]

    result = run_engine(scenario, seed)

    assert [item.reason for item in result.failures] == [FailureReason.no_instructor]
    assert result.failures[0].session_type == SessionType.lecture
    assert [item.session_type for item in result.sessions] == [SessionType.section]


def test_missing_room_type_reports_no_room(scenario):
    scenario["courses"] = [make_course(has_lecture=False, has_section=False, has_lab=True, hours_lab=1.67)]
    scenario["rooms"] = [room for room in scenario["rooms"] if room.type != RoomType.lab]

    result = run_engine(scenario, 1)

    assert result.sessions == []
    assert [item.reason for item in result.failures] == [FailureReason.no_room]


def test_uncapable_course_reports_no_instructor(scenario):
    scenario["instructors"] = [make_instructor(capable_course_ids=frozenset({"other"}))]

    result = run_engine(scenario, 1)

    assert result.sessions == []
    assert {item.reason for item in result.failures} == {FailureReason.no_instructor}


def test_exhausted_week_reports_no_time(lecture_hall):
    # Four usable days with three pair blocks each: twelve pairs fit, the thirteenth cannot.
    course = make_course(has_section=False, hours_section=0, hours_lecture=22)
    instructor = make_instructor(max_hours_per_week=40)

    result = PlacementEngine(
        courses=[course], instructors=[instructor], rooms=[lecture_hall], rng=random.Random(3)
    ).run()

    assert len(result.sessions) == 24
    assert [item.reason for item in result.failures] == [FailureReason.no_time]
    assert summarize_failures(result.failures) == "Generated with issues. Unscheduled: 1 No Slot"


def test_preferred_day_is_honoured_when_instructor_works_it(scenario):
    scenario["courses"] = [make_course(preferred_day=Day.tuesday)]

    for seed in range(5):
        result = run_engine(scenario, seed)
        assert result.failures == []
        assert {item.day for item in result.sessions} == {Day.tuesday}


def test_preferred_free_day_falls_back_to_whole_week(scenario):
    scenario["courses"] = [make_course(preferred_day=Day.friday)]

    result = run_engine(scenario, 2)

    assert result.failures == []
    assert Day.friday not in {item.day for item in result.sessions}


@pytest.mark.parametrize("seed", range(10))
def test_demo_data_never_double_books_or_breaks_constraints(seed):
    instructors = demo_instructors()
    rooms = demo_rooms()
    result = PlacementEngine(
        courses=demo_courses(), instructors=instructors, rooms=rooms, rng=random.Random(seed)
    ).run()

    report = ConflictService(result.sessions, instructors, rooms).detect_conflicts()
    assert report.conflicts == []

    by_instructor = {item.id: item for item in instructors}
    by_room = {item.id: item for item in rooms}
    for session in result.sessions:
        instructor = by_instructor[session.instructor_id]
        assert instructor.can_teach(session.course_id)
        assert by_room[session.room_id].type == required_room_type(session.session_type)
        if session.period == BREAK_PERIOD:
            assert instructor.can_teach_break


def test_same_seed_reproduces_the_same_schedule(scenario):
    assert run_engine(scenario, 42).sessions == run_engine(scenario, 42).sessions


def test_locked_single_is_preserved_and_not_duplicated(scenario):
    first = run_engine(scenario, 5)
    section = next(item for item in first.sessions if item.session_type == SessionType.section)
    schedule = [item.with_lock(True) if item.id == section.id else item for item in first.sessions]

    second = run_engine(scenario, 6, current_schedule=schedule)

    assert section.with_lock(True) in second.sessions
    counts = Counter(item.session_type for item in second.sessions)
    assert counts[SessionType.section] == 1
    assert counts[SessionType.lecture] == 2
    assert second.placed_count == 2


def test_half_locked_pair_is_placed_again(scenario):
    first = run_engine(scenario, 5)
    lecture = next(item for item in first.sessions if item.session_type == SessionType.lecture)
    schedule = [lecture.with_lock(True)]

    second = run_engine(scenario, 6, current_schedule=schedule)

    counts = Counter(item.session_type for item in second.sessions)
    assert counts[SessionType.lecture] == 3
    assert lecture.with_lock(True) in second.sessions


def test_locked_sessions_dropped_when_not_preserved(scenario):
    first = run_engine(scenario, 5)
    schedule = [item.with_lock(True) for item in first.sessions]

    second = run_engine(scenario, 6, current_schedule=schedule, preserve_locked=False)

    assert len(second.sessions) == 3
    assert not any(item.locked for item in second.sessions)


def test_locked_sessions_charge_instructor_load(scenario):
    first = run_engine(scenario, 5)
    section = next(item for item in first.sessions if item.session_type == SessionType.section)
    scenario["instructors"] = [make_instructor(max_hours_per_week=1.0)]

    second = run_engine(scenario, 6, current_schedule=[section.with_lock(True)])

    # 0.83 locked + 1.66 pair exceeds 1.0 + 0.5 tolerance.
    assert [item.reason for item in second.failures] == [FailureReason.no_instructor]


def test_priority_order_puts_pairs_first_then_difficulty(lecture_hall):
    course = make_course(
        has_lecture=True,
        has_section=True,
        has_lab=True,
        hours_lecture=0.83,
        hours_section=1.67,
        hours_lab=2.5,
    )
    engine = PlacementEngine(courses=[course], instructors=[], rooms=[lecture_hall], rng=random.Random(0))

    ordered = engine._priority_order(engine._outstanding_tasks([]))

    assert [(item.consecutive, item.session_type) for item in ordered] == [
        (True, SessionType.lab),
        (True, SessionType.section),
        (False, SessionType.lab),
        (False, SessionType.lecture),
    ]


def test_summarize_failures_counts_each_reason():
    scenario_failures = PlacementEngine(
        courses=[make_course()],
        instructors=[],
        rooms=[Room(id="r9", name="Spare", type=RoomType.lab)],
        rng=random.Random(0),
    ).run().failures

    assert summarize_failures(scenario_failures) == "Generated with issues. Unscheduled: 2 No Instructor"
    assert summarize_failures([]) is None
