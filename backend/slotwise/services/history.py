from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
import logging
import uuid

from slotwise.core.exceptions import ResourceNotFoundError
from slotwise.models.session import Session

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ScheduleHistoryItem:
    id: str
    created_at: datetime
    label: str
    sessions: tuple[Session, ...]
    failed_count: int


@dataclass(frozen=True)
class VersionComparison:
    from_version_id: str
    to_version_id: str
    from_label: str
    to_label: str
    added_sessions: int
    removed_sessions: int
    changed_sessions: int


def _fingerprints(sessions: Iterable[Session]) -> set[tuple]:
    return {
        (item.course_id, item.instructor_id, item.room_id, item.session_type, item.day, item.period)
        for item in sessions
    }


class ScheduleHistory:
    """Append-only log of generated schedules plus the active schedule.

    Snapshots are never edited or removed. Restoring one only swaps the active
    schedule.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._items: list[ScheduleHistoryItem] = []
        self._counter = 0
        self._clock = clock
        self.active_sessions: tuple[Session, ...] = ()

    @property
    def items(self) -> list[ScheduleHistoryItem]:
        """Snapshots, most recent first."""
        return list(reversed(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def set_active(self, sessions: Iterable[Session]) -> None:
        self.active_sessions = tuple(sessions)

    def record_version(self, sessions: Iterable[Session], failed_count: int) -> ScheduleHistoryItem:
        self._counter += 1
        item = ScheduleHistoryItem(
            id=str(uuid.uuid4()),
            created_at=self._clock(),
            label=f"Version {self._counter}",
            sessions=tuple(sessions),
            failed_count=failed_count,
        )
        self._items.append(item)
        self.active_sessions = item.sessions
        logger.info(
            "Recorded schedule version label=%s sessions=%s failed=%s",
            item.label,
            len(item.sessions),
            failed_count,
        )
        return item

    def find(self, version_id: str) -> ScheduleHistoryItem | None:
        return next((item for item in self._items if item.id == version_id), None)

    def get(self, version_id: str) -> ScheduleHistoryItem:
        item = self.find(version_id)
        if item is None:
            raise ResourceNotFoundError("Schedule version", version_id)
        return item

    def restore(self, version_id: str) -> ScheduleHistoryItem | None:
        item = self.find(version_id)
        if item is None:
            logger.warning("Ignoring restore of unknown schedule version id=%s", version_id)
            return None
        self.active_sessions = item.sessions
        logger.info("Restored schedule version label=%s", item.label)
        return item

    def compare(self, from_id: str, to_id: str) -> VersionComparison:
        source = self.get(from_id)
        target = self.get(to_id)
        from_slots = _fingerprints(source.sessions)
        to_slots = _fingerprints(target.sessions)
        added = to_slots - from_slots
        removed = from_slots - to_slots
        return VersionComparison(
            from_version_id=source.id,
            to_version_id=target.id,
            from_label=source.label,
            to_label=target.label,
            added_sessions=len(added),
            removed_sessions=len(removed),
            changed_sessions=min(len(added), len(removed)),
        )
