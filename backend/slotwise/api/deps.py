from functools import lru_cache
import logging

from slotwise.core.config import get_settings
from slotwise.services.demo_data import build_demo_workspace
from slotwise.services.workspace import TimetableWorkspace

logger = logging.getLogger(__name__)


@lru_cache
def get_workspace() -> TimetableWorkspace:
    settings = get_settings()
    if not settings.seed_demo_data:
        return TimetableWorkspace(auto_regenerate=settings.auto_regenerate, random_seed=settings.random_seed)

    workspace = build_demo_workspace(auto_regenerate=settings.auto_regenerate, random_seed=settings.random_seed)
    logger.info(
        "Seeded demo workspace courses=%s instructors=%s rooms=%s",
        len(workspace.courses),
        len(workspace.instructors),
        len(workspace.rooms),
    )
    return workspace
