from datetime import datetime

from pydantic import BaseModel

from slotwise.schemas.timetable import SessionOut
from slotwise.services.history import ScheduleHistoryItem


class ScheduleVersionOut(BaseModel):
    id: str
    label: str
    created_at: datetime
    failed_count: int
    session_count: int

    @classmethod
    def from_item(cls, item: ScheduleHistoryItem) -> "ScheduleVersionOut":
        return cls(
            id=item.id,
            label=item.label,
            created_at=item.created_at,
            failed_count=item.failed_count,
            session_count=len(item.sessions),
        )


class ScheduleVersionDetail(ScheduleVersionOut):
    sessions: list[SessionOut]

    @classmethod
    def from_item(cls, item: ScheduleHistoryItem) -> "ScheduleVersionDetail":
        return cls(
            id=item.id,
            label=item.label,
            created_at=item.created_at,
            failed_count=item.failed_count,
            session_count=len(item.sessions),
            sessions=[SessionOut.model_validate(session) for session in item.sessions],
        )


class ScheduleVersionCompare(BaseModel):
    from_version_id: str
    to_version_id: str
    added_sessions: int
    removed_sessions: int
    changed_sessions: int
    from_label: str
    to_label: str

    model_config = {"from_attributes": True}
