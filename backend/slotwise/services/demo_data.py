from __future__ import annotations

from slotwise.models.calendar import Day
from slotwise.models.course import Course, Curriculum
from slotwise.models.instructor import Instructor, InstructorRole
from slotwise.models.room import Room, RoomType
from slotwise.services.workspace import TimetableWorkspace

WEEKDAYS = frozenset({Day.monday, Day.tuesday, Day.wednesday, Day.thursday, Day.friday})


def demo_courses() -> list[Course]:
    return [
        Course(
            id="c1",
            code="CS101",
            name="Intro to Computer Science",
            curriculum=Curriculum.new,
            has_lecture=True,
            has_section=True,
            has_lab=True,
            hours_lecture=1.67,
            hours_section=1.67,
            hours_lab=1.67,
        ),
        Course(
            id="c2",
            code="MATH202",
            name="Linear Algebra",
            curriculum=Curriculum.old,
            has_lecture=True,
            has_section=True,
            hours_lecture=1.67,
            hours_section=1.67,
        ),
        Course(
            id="c3",
            code="PHY101",
            name="Physics I",
            curriculum=Curriculum.new,
            has_lecture=True,
            has_lab=True,
            hours_lecture=1.67,
            hours_lab=3.34,
        ),
    ]


def demo_instructors() -> list[Instructor]:
    return [
        Instructor(
            id="i1",
            name="Dr. Alan Turing",
            role=InstructorRole.lecturer,
            department="CS",
            capable_course_ids=frozenset({"c1", "c2"}),
            working_days=WEEKDAYS,
            free_day=Day.friday,
            max_hours_per_week=12,
        ),
        Instructor(
            id="i2",
            name="Grace Hopper",
            role=InstructorRole.teaching_assistant,
            department="CS",
            capable_course_ids=frozenset({"c1", "c3"}),
            working_days=frozenset({Day.monday, Day.tuesday, Day.wednesday, Day.thursday, Day.saturday}),
            free_day=Day.wednesday,
            max_hours_per_week=18,
            can_teach_break=True,
        ),
        Instructor(
            id="i3",
            name="Isaac Newton",
            role=InstructorRole.lecturer,
            department="Physics",
            capable_course_ids=frozenset({"c3", "c2"}),
            working_days=frozenset({Day.tuesday, Day.wednesday, Day.thursday, Day.friday, Day.saturday}),
            free_day=Day.tuesday,
            max_hours_per_week=10,
        ),
    ]


def demo_rooms() -> list[Room]:
    return [
        Room(id="r1", name="Hall A", type=RoomType.lecture_hall, capacity=100),
        Room(id="r2", name="Hall B", type=RoomType.lecture_hall, capacity=80),
        Room(id="r3", name="Lab 101", type=RoomType.lab, capacity=30),
        Room(id="r4", name="Lab 102", type=RoomType.lab, capacity=30),
        Room(id="r5", name="Sec 201", type=RoomType.section_room, capacity=40),
        Room(id="r6", name="Sec 202", type=RoomType.section_room, capacity=40),
    ]


def build_demo_workspace(*, auto_regenerate: bool = True, random_seed: int | None = None) -> TimetableWorkspace:
    return TimetableWorkspace(
        courses=demo_courses(),
        instructors=demo_instructors(),
        rooms=demo_rooms(),
        auto_regenerate=auto_regenerate,
        random_seed=random_seed,
    )
