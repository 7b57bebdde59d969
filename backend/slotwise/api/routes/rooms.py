import uuid

from fastapi import APIRouter, Depends, HTTPException, status

from slotwise.api.deps import get_workspace
from slotwise.schemas.room import RoomCreate, RoomOut, RoomUpdate
from slotwise.services.workspace import TimetableWorkspace

router = APIRouter()


def _ensure_unique_name(workspace: TimetableWorkspace, name: str, room_id: str | None = None) -> None:
    if any(item.name == name and item.id != room_id for item in workspace.rooms):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Room name already exists")


@router.get("/", response_model=list[RoomOut])
def list_rooms(workspace: TimetableWorkspace = Depends(get_workspace)) -> list[RoomOut]:
    return [RoomOut.model_validate(item) for item in workspace.rooms]


@router.post("/", response_model=RoomOut, status_code=status.HTTP_201_CREATED)
def create_room(payload: RoomCreate, workspace: TimetableWorkspace = Depends(get_workspace)) -> RoomOut:
    _ensure_unique_name(workspace, payload.name)
    (room,) = workspace.add_rooms([payload.to_model(str(uuid.uuid4()))])
    return RoomOut.model_validate(room)


@router.put("/{room_id}", response_model=RoomOut)
def update_room(room_id: str, payload: RoomUpdate, workspace: TimetableWorkspace = Depends(get_workspace)) -> RoomOut:
    workspace.get_room(room_id)
    _ensure_unique_name(workspace, payload.name, room_id)
    room = workspace.update_room(payload.to_model(room_id))
    return RoomOut.model_validate(room)


@router.delete("/{room_id}")
def delete_room(room_id: str, workspace: TimetableWorkspace = Depends(get_workspace)) -> dict:
    workspace.delete_room(room_id)
    return {"success": True}
