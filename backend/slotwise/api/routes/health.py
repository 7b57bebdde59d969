from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from slotwise.api.deps import get_workspace
from slotwise.services.workspace import TimetableWorkspace

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live(workspace: TimetableWorkspace = Depends(get_workspace)) -> dict:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "workspace": {
            "courses": len(workspace.courses),
            "instructors": len(workspace.instructors),
            "rooms": len(workspace.rooms),
            "sessions": len(workspace.schedule),
            "versions": len(workspace.history),
        },
    }
