from __future__ import annotations

from pydantic import BaseModel, Field

from slotwise.models.calendar import Day, Period
from slotwise.models.session import SessionType
from slotwise.services.placement import FailureReason


class PeriodOut(BaseModel):
    period: Period
    start_time: str
    end_time: str
    is_break: bool
    starts_double_block: bool


class SessionOut(BaseModel):
    id: str
    course_id: str
    instructor_id: str
    room_id: str | None
    session_type: SessionType
    day: Day
    period: Period
    locked: bool

    model_config = {"from_attributes": True}


class PlacementFailureOut(BaseModel):
    course_id: str
    course_code: str
    session_type: SessionType
    reason: FailureReason

    model_config = {"from_attributes": True}


class GenerateScheduleRequest(BaseModel):
    preserve_locked: bool = True
    random_seed: int | None = Field(default=None, ge=0, le=2_000_000_000)


class GenerateScheduleResponse(BaseModel):
    version_id: str
    version_label: str
    sessions: list[SessionOut] = Field(default_factory=list)
    failures: list[PlacementFailureOut] = Field(default_factory=list)
    conflicts: int = 0
    message: str | None = None


class MoveSessionRequest(BaseModel):
    day: Day
    period: Period


class MoveCheckOut(BaseModel):
    valid: bool
    reason: str | None = None

    model_config = {"from_attributes": True}


class WorkloadEntryOut(BaseModel):
    instructor_id: str
    name: str
    assigned_hours: float
    max_hours: float
    status: str

    model_config = {"from_attributes": True}
