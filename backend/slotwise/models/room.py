from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RoomType(str, Enum):
    lecture_hall = "lecture_hall"
    section_room = "section_room"
    lab = "lab"


@dataclass(frozen=True)
class Room:
    id: str
    name: str
    type: RoomType
    capacity: int = 30
