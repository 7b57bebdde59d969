from fastapi import APIRouter, Depends, HTTPException, Query, status

from slotwise.api.deps import get_workspace
from slotwise.schemas.version import ScheduleVersionCompare, ScheduleVersionDetail, ScheduleVersionOut
from slotwise.services.workspace import TimetableWorkspace

router = APIRouter()


@router.get("/", response_model=list[ScheduleVersionOut])
def list_versions(workspace: TimetableWorkspace = Depends(get_workspace)) -> list[ScheduleVersionOut]:
    return [ScheduleVersionOut.from_item(item) for item in workspace.history.items]


@router.get("/compare", response_model=ScheduleVersionCompare)
def compare_versions(
    from_id: str = Query(..., alias="from"),
    to_id: str = Query(..., alias="to"),
    workspace: TimetableWorkspace = Depends(get_workspace),
) -> ScheduleVersionCompare:
    return ScheduleVersionCompare.model_validate(workspace.history.compare(from_id, to_id))


@router.get("/{version_id}", response_model=ScheduleVersionDetail)
def get_version(version_id: str, workspace: TimetableWorkspace = Depends(get_workspace)) -> ScheduleVersionDetail:
    return ScheduleVersionDetail.from_item(workspace.history.get(version_id))


@router.post("/{version_id}/restore", response_model=ScheduleVersionOut)
def restore_version(version_id: str, workspace: TimetableWorkspace = Depends(get_workspace)) -> ScheduleVersionOut:
    item = workspace.restore_version(version_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Version not found")
    return ScheduleVersionOut.from_item(item)
