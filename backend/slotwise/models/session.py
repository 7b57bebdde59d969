from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from slotwise.models.calendar import Day, Period
from slotwise.models.room import RoomType


class SessionType(str, Enum):
    lecture = "lecture"
    section = "section"
    lab = "lab"


REQUIRED_ROOM_TYPE: dict[SessionType, RoomType] = {
    SessionType.lecture: RoomType.lecture_hall,
    SessionType.section: RoomType.section_room,
    SessionType.lab: RoomType.lab,
}


def required_room_type(session_type: SessionType) -> RoomType:
    return REQUIRED_ROOM_TYPE[session_type]


@dataclass(frozen=True)
class Session:
    id: str
    course_id: str
    instructor_id: str
    room_id: str | None
    session_type: SessionType
    day: Day
    period: Period
    locked: bool = False

    def moved_to(self, day: Day, period: Period) -> "Session":
        return replace(self, day=day, period=period)

    def with_lock(self, locked: bool) -> "Session":
        return replace(self, locked=locked)
