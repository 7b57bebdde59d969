from fastapi import APIRouter, Depends

from slotwise.api.deps import get_workspace
from slotwise.core.config import Settings, get_settings
from slotwise.schemas.conflict import ConflictReport
from slotwise.services.workspace import TimetableWorkspace

router = APIRouter()


@router.get("/", response_model=ConflictReport)
def detect_conflicts(
    session_id: str | None = None,
    workspace: TimetableWorkspace = Depends(get_workspace),
    settings: Settings = Depends(get_settings),
) -> ConflictReport:
    report = workspace.conflicts(max_suggestions=settings.max_suggestions)
    if session_id is None:
        return report
    return ConflictReport(
        conflicts=report.for_session(session_id),
        suggested_resolutions=[
            item for item in report.suggested_resolutions if item.target_session_id == session_id
        ],
    )
