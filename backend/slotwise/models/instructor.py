from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from slotwise.models.calendar import BREAK_PERIOD, Day, Period


class InstructorRole(str, Enum):
    lecturer = "lecturer"
    teaching_assistant = "teaching_assistant"


@dataclass(frozen=True)
class Instructor:
    id: str
    name: str
    role: InstructorRole
    department: str
    capable_course_ids: frozenset[str]
    working_days: frozenset[Day]
    free_day: Day
    max_hours_per_week: float
    can_teach_break: bool = False

    def can_teach(self, course_id: str) -> bool:
        return course_id in self.capable_course_ids

    def works_on(self, day: Day) -> bool:
        return day in self.working_days and day != self.free_day

    def is_available(self, day: Day, period: Period) -> bool:
        if not self.works_on(day):
            return False
        return period != BREAK_PERIOD or self.can_teach_break
