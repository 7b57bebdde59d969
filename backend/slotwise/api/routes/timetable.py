import logging

from fastapi import APIRouter, Depends, Query

from slotwise.api.deps import get_workspace
from slotwise.core.config import Settings, get_settings
from slotwise.models.calendar import BREAK_PERIOD, DOUBLE_PERIOD_STARTS, PERIOD_SEQUENCE, Day, period_bounds
from slotwise.models.instructor import InstructorRole
from slotwise.schemas.timetable import (
    GenerateScheduleRequest,
    GenerateScheduleResponse,
    MoveCheckOut,
    MoveSessionRequest,
    PeriodOut,
    PlacementFailureOut,
    SessionOut,
    WorkloadEntryOut,
)
from slotwise.services.placement import summarize_failures
from slotwise.services.workspace import TimetableWorkspace

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/periods", response_model=list[PeriodOut])
def list_periods() -> list[PeriodOut]:
    periods: list[PeriodOut] = []
    for period in PERIOD_SEQUENCE:
        start, end = period_bounds(period)
        periods.append(
            PeriodOut(
                period=period,
                start_time=start,
                end_time=end,
                is_break=period == BREAK_PERIOD,
                starts_double_block=period in DOUBLE_PERIOD_STARTS,
            )
        )
    return periods


@router.get("/sessions", response_model=list[SessionOut])
def list_sessions(
    instructor_id: str | None = Query(default=None, alias="instructorId"),
    course_id: str | None = Query(default=None, alias="courseId"),
    room_id: str | None = Query(default=None, alias="roomId"),
    day: Day | None = None,
    role: InstructorRole | None = None,
    workspace: TimetableWorkspace = Depends(get_workspace),
) -> list[SessionOut]:
    sessions = workspace.schedule
    if instructor_id is not None:
        sessions = [item for item in sessions if item.instructor_id == instructor_id]
    if course_id is not None:
        sessions = [item for item in sessions if item.course_id == course_id]
    if room_id is not None:
        sessions = [item for item in sessions if item.room_id == room_id]
    if day is not None:
        sessions = [item for item in sessions if item.day == day]
    if role is not None:
        roles = {item.id: item.role for item in workspace.instructors}
        sessions = [item for item in sessions if roles.get(item.instructor_id) == role]
    return [SessionOut.model_validate(item) for item in sessions]


@router.post("/generate", response_model=GenerateScheduleResponse)
def generate_schedule(
    payload: GenerateScheduleRequest,
    workspace: TimetableWorkspace = Depends(get_workspace),
) -> GenerateScheduleResponse:
    regeneration = workspace.regenerate(preserve_locked=payload.preserve_locked, seed=payload.random_seed)
    result = regeneration.result
    conflicts = workspace.conflicts().conflicts
    message = summarize_failures(result.failures)
    if message is None and not result.sessions:
        message = "No sessions generated. Check course hours."
    if message:
        logger.info("Generation finished with issues version=%s message=%s", regeneration.version.label, message)
    return GenerateScheduleResponse(
        version_id=regeneration.version.id,
        version_label=regeneration.version.label,
        sessions=[SessionOut.model_validate(item) for item in result.sessions],
        failures=[PlacementFailureOut.model_validate(item) for item in result.failures],
        conflicts=len(conflicts),
        message=message,
    )


@router.post("/sessions/{session_id}/move/check", response_model=MoveCheckOut)
def check_move(
    session_id: str,
    payload: MoveSessionRequest,
    workspace: TimetableWorkspace = Depends(get_workspace),
) -> MoveCheckOut:
    return MoveCheckOut.model_validate(workspace.check_move(session_id, payload.day, payload.period))


@router.post("/sessions/{session_id}/move", response_model=SessionOut)
def move_session(
    session_id: str,
    payload: MoveSessionRequest,
    workspace: TimetableWorkspace = Depends(get_workspace),
) -> SessionOut:
    return SessionOut.model_validate(workspace.move_session(session_id, payload.day, payload.period))


@router.post("/sessions/{session_id}/lock", response_model=SessionOut)
def toggle_session_lock(session_id: str, workspace: TimetableWorkspace = Depends(get_workspace)) -> SessionOut:
    return SessionOut.model_validate(workspace.toggle_lock(session_id))


@router.delete("/sessions/{session_id}")
def delete_session(session_id: str, workspace: TimetableWorkspace = Depends(get_workspace)) -> dict:
    workspace.delete_session(session_id)
    return {"success": True}


@router.get("/workload", response_model=list[WorkloadEntryOut])
def workload(workspace: TimetableWorkspace = Depends(get_workspace)) -> list[WorkloadEntryOut]:
    return [WorkloadEntryOut.model_validate(item) for item in workspace.workload()]


@router.get("/summary")
def schedule_summary(
    workspace: TimetableWorkspace = Depends(get_workspace),
    settings: Settings = Depends(get_settings),
) -> dict:
    report = workspace.conflicts()
    schedule = workspace.schedule
    return {
        "total_sessions": len(schedule),
        "locked_sessions": sum(1 for item in schedule if item.locked),
        "unassigned_sessions": sum(1 for item in schedule if item.room_id is None),
        "conflicts": len(report.conflicts),
        "auto_regenerate": settings.auto_regenerate,
    }
