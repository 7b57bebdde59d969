import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from slotwise.api.deps import get_workspace
from slotwise.schemas.course import CourseBulkCreate, CourseCreate, CourseOut, CourseUpdate
from slotwise.services.workspace import TimetableWorkspace

router = APIRouter()


def _ensure_unique_code(workspace: TimetableWorkspace, code: str, course_id: str | None = None) -> None:
    if any(item.code == code and item.id != course_id for item in workspace.courses):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Course code already exists")


@router.get("/", response_model=list[CourseOut])
def list_courses(workspace: TimetableWorkspace = Depends(get_workspace)) -> list[CourseOut]:
    return [CourseOut.model_validate(item) for item in workspace.courses]


@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: str, workspace: TimetableWorkspace = Depends(get_workspace)) -> CourseOut:
    return CourseOut.model_validate(workspace.get_course(course_id))


@router.post("/", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate, workspace: TimetableWorkspace = Depends(get_workspace)) -> CourseOut:
    _ensure_unique_code(workspace, payload.code)
    course = payload.to_model(str(uuid.uuid4()))
    # Capabilities must be in place before add_courses regenerates.
    if payload.instructor_ids is not None:
        workspace.assign_course_instructors(course.id, payload.instructor_ids)
    workspace.add_courses([course])
    return CourseOut.model_validate(course)


@router.post("/bulk", response_model=list[CourseOut], status_code=status.HTTP_201_CREATED)
def create_courses_bulk(
    payload: CourseBulkCreate,
    workspace: TimetableWorkspace = Depends(get_workspace),
) -> list[CourseOut]:
    courses = payload.to_models()
    if not courses:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No course lines could be parsed")
    seen: set[str] = set()
    for course in courses:
        _ensure_unique_code(workspace, course.code)
        if course.code in seen:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Course code {course.code} appears more than once",
            )
        seen.add(course.code)
    workspace.add_courses(courses)
    return [CourseOut.model_validate(item) for item in courses]


@router.put("/{course_id}", response_model=CourseOut)
def update_course(
    course_id: str,
    payload: CourseUpdate,
    workspace: TimetableWorkspace = Depends(get_workspace),
) -> CourseOut:
    workspace.get_course(course_id)
    _ensure_unique_code(workspace, payload.code, course_id)
    course = workspace.update_course(payload.to_model(course_id), payload.instructor_ids)
    return CourseOut.model_validate(course)


@router.delete("/{course_id}")
def delete_course(course_id: str, workspace: TimetableWorkspace = Depends(get_workspace)) -> dict:
    regeneration = workspace.delete_course(course_id)
    return {
        "success": True,
        "regenerated_version": regeneration.version.label if regeneration else None,
    }
