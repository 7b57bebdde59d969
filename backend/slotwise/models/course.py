from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from slotwise.models.calendar import Day
from slotwise.models.session import SessionType


class Curriculum(str, Enum):
    new = "new"
    old = "old"


@dataclass(frozen=True)
class Course:
    id: str
    code: str
    name: str
    curriculum: Curriculum = Curriculum.new
    has_lecture: bool = False
    has_section: bool = False
    has_lab: bool = False
    hours_lecture: float = 0.0
    hours_section: float = 0.0
    hours_lab: float = 0.0
    preferred_day: Day | None = None

    def components(self) -> list[tuple[SessionType, bool, float]]:
        """Lecture, section and lab components in decomposition order."""
        return [
            (SessionType.lecture, self.has_lecture, self.hours_lecture),
            (SessionType.section, self.has_section, self.hours_section),
            (SessionType.lab, self.has_lab, self.hours_lab),
        ]

    def has_component(self, session_type: SessionType) -> bool:
        return any(active for kind, active, _ in self.components() if kind == session_type)

    @property
    def total_hours(self) -> float:
        return round(sum(hours for _, active, hours in self.components() if active), 2)
