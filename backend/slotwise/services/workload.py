from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

from slotwise.models.instructor import Instructor
from slotwise.models.session import Session
from slotwise.services.decomposer import SINGLE_PERIOD_HOURS

WorkloadStatus = Literal["overloaded", "idle", "ok"]


@dataclass(frozen=True)
class WorkloadEntry:
    instructor_id: str
    name: str
    assigned_hours: float
    max_hours: float
    status: WorkloadStatus


def hours_for_sessions(count: int) -> float:
    return round(count * SINGLE_PERIOD_HOURS, 1)


def assigned_hours(instructor_id: str, sessions: Iterable[Session]) -> float:
    return hours_for_sessions(sum(1 for item in sessions if item.instructor_id == instructor_id))


def workload_status(assigned: float, max_hours: float) -> WorkloadStatus:
    if assigned > max_hours:
        return "overloaded"
    if assigned == 0:
        return "idle"
    return "ok"


def build_workload_report(instructors: Iterable[Instructor], sessions: Sequence[Session]) -> list[WorkloadEntry]:
    counts = Counter(item.instructor_id for item in sessions)
    entries: list[WorkloadEntry] = []
    for instructor in instructors:
        assigned = hours_for_sessions(counts[instructor.id])
        entries.append(
            WorkloadEntry(
                instructor_id=instructor.id,
                name=instructor.name,
                assigned_hours=assigned,
                max_hours=instructor.max_hours_per_week,
                status=workload_status(assigned, instructor.max_hours_per_week),
            )
        )
    return entries
