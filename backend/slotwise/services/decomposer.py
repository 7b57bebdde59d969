from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from slotwise.models.course import Course
from slotwise.models.session import SessionType

# One period is 50 minutes; a double period is two of them back to back.
SINGLE_PERIOD_HOURS = 0.83
DOUBLE_PERIOD_HOURS = 1.67
MIN_SCHEDULABLE_HOURS = 0.8
CONSECUTIVE_THRESHOLD_HOURS = 1.5

# Load charged to an instructor for a placed pair (two single periods).
PAIR_LOAD_HOURS = 2 * SINGLE_PERIOD_HOURS


@dataclass(frozen=True)
class PlacementTask:
    course_id: str
    course_code: str
    session_type: SessionType
    consecutive: bool

    @property
    def hours(self) -> float:
        return PAIR_LOAD_HOURS if self.consecutive else SINGLE_PERIOD_HOURS

    @property
    def block_count(self) -> int:
        return 2 if self.consecutive else 1


def decompose_course(course: Course) -> list[PlacementTask]:
    tasks: list[PlacementTask] = []
    for session_type, active, hours in course.components():
        if not active:
            continue
        remaining = hours
        while remaining >= MIN_SCHEDULABLE_HOURS:
            consecutive = remaining >= CONSECUTIVE_THRESHOLD_HOURS
            tasks.append(
                PlacementTask(
                    course_id=course.id,
                    course_code=course.code,
                    session_type=session_type,
                    consecutive=consecutive,
                )
            )
            remaining -= DOUBLE_PERIOD_HOURS if consecutive else SINGLE_PERIOD_HOURS
    return tasks


def decompose_courses(courses: Iterable[Course]) -> list[PlacementTask]:
    tasks: list[PlacementTask] = []
    for course in courses:
        tasks.extend(decompose_course(course))
    return tasks


def implied_hours(tasks: Iterable[PlacementTask]) -> float:
    """Hours of course time the tasks cover, in decomposition units."""
    total = sum(DOUBLE_PERIOD_HOURS if task.consecutive else SINGLE_PERIOD_HOURS for task in tasks)
    return round(total, 2)


def truncated_hours(course: Course) -> float:
    """Declared hours that no task covers (non-conforming remainders)."""
    return round(max(0.0, course.total_hours - implied_hours(decompose_course(course))), 2)
