from pydantic import BaseModel, Field
from typing import Literal, List

from slotwise.models.calendar import Day, Period

ConflictKind = Literal["DoubleBooking", "ConstraintViolation", "Capacity"]


class Conflict(BaseModel):
    session_id: str
    kind: ConflictKind
    message: str


class ResolutionAction(BaseModel):
    action_type: Literal["move_session"] = "move_session"
    description: str
    target_session_id: str
    day: Day
    period: Period


class ConflictReport(BaseModel):
    conflicts: List[Conflict] = Field(default_factory=list)
    suggested_resolutions: List[ResolutionAction] = Field(default_factory=list)

    def for_session(self, session_id: str) -> List[Conflict]:
        return [item for item in self.conflicts if item.session_id == session_id]
