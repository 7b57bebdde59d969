import pytest

from slotwise.models.course import Course
from slotwise.models.session import SessionType
from slotwise.services.decomposer import (
    PAIR_LOAD_HOURS,
    SINGLE_PERIOD_HOURS,
    decompose_course,
    decompose_courses,
    implied_hours,
    truncated_hours,
)


def lecture_only(hours: float) -> Course:
    return Course(id="c1", code="C1", name="Course 1", has_lecture=True, hours_lecture=hours)


@pytest.mark.parametrize(
    ("hours", "expected"),
    [
        (0.83, [False]),
        (1.67, [True]),
        (2.5, [True, False]),
        (3.34, [True, True]),
    ],
)
def test_component_hours_split_into_pairs_then_singles(hours, expected):
    tasks = decompose_course(lecture_only(hours))

    assert [task.consecutive for task in tasks] == expected
    assert implied_hours(tasks) == pytest.approx(hours)
    assert truncated_hours(lecture_only(hours)) == 0


def test_hours_below_minimum_are_ignored():
    assert decompose_course(lecture_only(0.5)) == []
    assert truncated_hours(lecture_only(0.5)) == pytest.approx(0.5)


def test_non_conforming_hours_are_truncated():
    tasks = decompose_course(lecture_only(2.0))

    assert [task.consecutive for task in tasks] == [True]
    assert truncated_hours(lecture_only(2.0)) == pytest.approx(0.33)


def test_inactive_components_produce_no_tasks():
    course = Course(id="c1", code="C1", name="Course 1", has_lecture=False, hours_lecture=1.67)

    assert decompose_course(course) == []


def test_components_are_emitted_lecture_section_lab():
    course = Course(
        id="c9",
        code="BIO110",
        name="Biology",
        has_lecture=True,
        has_section=True,
        has_lab=True,
        hours_lecture=0.83,
        hours_section=1.67,
        hours_lab=0.83,
    )
    tasks = decompose_course(course)

    assert [task.session_type for task in tasks] == [SessionType.lecture, SessionType.section, SessionType.lab]
    assert {task.course_id for task in tasks} == {"c9"}
    assert {task.course_code for task in tasks} == {"BIO110"}


def test_task_hours_are_load_units():
    pair, single = decompose_course(lecture_only(2.5))

    assert pair.hours == pytest.approx(PAIR_LOAD_HOURS)
    assert pair.block_count == 2
    assert single.hours == pytest.approx(SINGLE_PERIOD_HOURS)
    assert single.block_count == 1


def test_decompose_courses_concatenates_in_course_order():
    tasks = decompose_courses([lecture_only(0.83), Course(id="c2", code="C2", name="Two", has_lab=True, hours_lab=1.67)])

    assert [(task.course_id, task.session_type) for task in tasks] == [
        ("c1", SessionType.lecture),
        ("c2", SessionType.lab),
    ]
