import uuid

from fastapi import APIRouter, Depends, status

from slotwise.api.deps import get_workspace
from slotwise.models.instructor import Instructor
from slotwise.schemas.instructor import InstructorBulkCreate, InstructorCreate, InstructorOut, InstructorUpdate
from slotwise.services.workload import assigned_hours
from slotwise.services.workspace import TimetableWorkspace

router = APIRouter()


def _to_out(workspace: TimetableWorkspace, instructor: Instructor) -> InstructorOut:
    return InstructorOut.from_model(instructor, assigned_hours(instructor.id, workspace.schedule))


@router.get("/", response_model=list[InstructorOut])
def list_instructors(workspace: TimetableWorkspace = Depends(get_workspace)) -> list[InstructorOut]:
    return [_to_out(workspace, item) for item in workspace.instructors]


@router.get("/{instructor_id}", response_model=InstructorOut)
def get_instructor(instructor_id: str, workspace: TimetableWorkspace = Depends(get_workspace)) -> InstructorOut:
    return _to_out(workspace, workspace.get_instructor(instructor_id))


@router.post("/", response_model=InstructorOut, status_code=status.HTTP_201_CREATED)
def create_instructor(
    payload: InstructorCreate,
    workspace: TimetableWorkspace = Depends(get_workspace),
) -> InstructorOut:
    (instructor,) = workspace.add_instructors([payload.to_model(str(uuid.uuid4()))])
    return _to_out(workspace, instructor)


@router.post("/bulk", response_model=list[InstructorOut], status_code=status.HTTP_201_CREATED)
def create_instructors_bulk(
    payload: InstructorBulkCreate,
    workspace: TimetableWorkspace = Depends(get_workspace),
) -> list[InstructorOut]:
    added = workspace.add_instructors(payload.to_models())
    return [_to_out(workspace, item) for item in added]


@router.put("/{instructor_id}", response_model=InstructorOut)
def update_instructor(
    instructor_id: str,
    payload: InstructorUpdate,
    workspace: TimetableWorkspace = Depends(get_workspace),
) -> InstructorOut:
    instructor = workspace.update_instructor(payload.to_model(instructor_id))
    return _to_out(workspace, instructor)


@router.delete("/{instructor_id}")
def delete_instructor(instructor_id: str, workspace: TimetableWorkspace = Depends(get_workspace)) -> dict:
    workspace.delete_instructor(instructor_id)
    return {"success": True}
