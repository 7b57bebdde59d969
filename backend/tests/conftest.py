import pytest
from fastapi.testclient import TestClient

from slotwise.api.deps import get_workspace
from slotwise.main import app
from slotwise.models.calendar import Day
from slotwise.models.course import Course
from slotwise.models.instructor import Instructor, InstructorRole
from slotwise.models.room import Room, RoomType
from slotwise.services.demo_data import build_demo_workspace

WEEKDAYS = frozenset({Day.monday, Day.tuesday, Day.wednesday, Day.thursday, Day.friday})


def make_course(**overrides) -> Course:
    values = dict(
        id="c1",
        code="CS101",
        name="Intro to Computer Science",
        has_lecture=True,
        has_section=True,
        hours_lecture=1.67,
        hours_section=0.83,
    )
    values.update(overrides)
    return Course(**values)


def make_instructor(**overrides) -> Instructor:
    values = dict(
        id="i1",
        name="Dr. Alan Turing",
        role=InstructorRole.lecturer,
        department="CS",
        capable_course_ids=frozenset({"c1"}),
        working_days=WEEKDAYS,
        free_day=Day.friday,
        max_hours_per_week=12,
        can_teach_break=False,
    )
    values.update(overrides)
    return Instructor(**values)


@pytest.fixture
def course_factory():
    return make_course


@pytest.fixture
def instructor_factory():
    return make_instructor


@pytest.fixture
def lecture_hall():
    return Room(id="r1", name="Hall A", type=RoomType.lecture_hall, capacity=100)


@pytest.fixture
def section_room():
    return Room(id="r5", name="Sec 201", type=RoomType.section_room, capacity=40)


@pytest.fixture
def lab_room():
    return Room(id="r3", name="Lab 101", type=RoomType.lab, capacity=30)


@pytest.fixture
def scenario(lecture_hall, section_room):
    """One course (1.67h lecture + 0.83h section), one lecturer, one hall, one section room."""
    return {
        "courses": [make_course()],
        "instructors": [make_instructor()],
        "rooms": [lecture_hall, section_room],
    }


@pytest.fixture
def workspace():
    return build_demo_workspace(random_seed=7)


@pytest.fixture()
def client(workspace):
    app.dependency_overrides[get_workspace] = lambda: workspace
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
