from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import uuid

from slotwise.models.calendar import DAYS, PERIOD_SEQUENCE, Day, Period, pair_partner
from slotwise.models.course import Course
from slotwise.models.instructor import Instructor
from slotwise.models.room import Room
from slotwise.models.session import Session, SessionType, required_room_type
from slotwise.services.decomposer import SINGLE_PERIOD_HOURS, PlacementTask, decompose_courses

logger = logging.getLogger(__name__)

LOAD_TOLERANCE_HOURS = 0.5

TYPE_DIFFICULTY: dict[SessionType, int] = {
    SessionType.lab: 3,
    SessionType.lecture: 2,
    SessionType.section: 1,
}


class FailureReason(str, Enum):
    no_instructor = "NO_INSTRUCTOR"
    no_room = "NO_ROOM"
    no_time = "NO_TIME"


FAILURE_LABELS: dict[FailureReason, str] = {
    FailureReason.no_instructor: "No Instructor",
    FailureReason.no_room: "No Room",
    FailureReason.no_time: "No Slot",
}


@dataclass(frozen=True)
class PlacementFailure:
    course_id: str
    course_code: str
    session_type: SessionType
    reason: FailureReason


@dataclass
class PlacementResult:
    sessions: list[Session]
    failures: list[PlacementFailure]

    @property
    def placed_count(self) -> int:
        return sum(1 for item in self.sessions if not item.locked)


@dataclass
class _SolveContext:
    """Mutable state of a single engine run."""

    sessions: list[Session] = field(default_factory=list)
    load: dict[str, float] = field(default_factory=dict)
    instructor_busy: set[tuple[str, Day, Period]] = field(default_factory=set)
    room_busy: set[tuple[str, Day, Period]] = field(default_factory=set)

    def occupy(self, session: Session) -> None:
        self.sessions.append(session)
        self.instructor_busy.add((session.instructor_id, session.day, session.period))
        if session.room_id is not None:
            self.room_busy.add((session.room_id, session.day, session.period))

    def is_free(self, instructor_id: str, room_id: str, day: Day, period: Period) -> bool:
        return (
            (instructor_id, day, period) not in self.instructor_busy
            and (room_id, day, period) not in self.room_busy
        )


def summarize_failures(failures: Sequence[PlacementFailure]) -> str | None:
    if not failures:
        return None
    counts = Counter(item.reason for item in failures)
    parts = [f"{counts[reason]} {label}" for reason, label in FAILURE_LABELS.items() if counts[reason]]
    return f"Generated with issues. Unscheduled: {', '.join(parts)}"


class PlacementEngine:
    """Greedy randomized first-fit construction of a weekly schedule.

    The engine never backtracks: once a task is placed it stays placed, and a
    task that cannot be placed is reported as a failure. Re-running with a
    different random state is the way to get a different layout.
    """

    def __init__(
        self,
        *,
        courses: Iterable[Course],
        instructors: Iterable[Instructor],
        rooms: Iterable[Room],
        rng: random.Random | None = None,
    ) -> None:
        self.courses = {item.id: item for item in courses}
        self.instructors = list(instructors)
        self.rooms = list(rooms)
        self.random = rng if rng is not None else random.Random()

    def run(self, current_schedule: Sequence[Session] = (), *, preserve_locked: bool = True) -> PlacementResult:
        context = _SolveContext(load={item.id: 0.0 for item in self.instructors})
        if preserve_locked:
            for session in current_schedule:
                if not session.locked:
                    continue
                context.occupy(session)
                if session.instructor_id in context.load:
                    context.load[session.instructor_id] += SINGLE_PERIOD_HOURS

        tasks = self._outstanding_tasks(context.sessions)
        ordered = self._priority_order(tasks)

        failures: list[PlacementFailure] = []
        for task in ordered:
            reason = self._place(task, context)
            if reason is None:
                continue
            failure = PlacementFailure(
                course_id=task.course_id,
                course_code=task.course_code,
                session_type=task.session_type,
                reason=reason,
            )
            failures.append(failure)
            logger.debug(
                "Unplaced task course=%s type=%s consecutive=%s reason=%s",
                task.course_code,
                task.session_type.value,
                task.consecutive,
                reason.value,
            )

        logger.info(
            "Placement run preserve_locked=%s locked=%s tasks=%s sessions=%s failures=%s",
            preserve_locked,
            sum(1 for item in context.sessions if item.locked),
            len(ordered),
            len(context.sessions),
            len(failures),
        )
        return PlacementResult(sessions=context.sessions, failures=failures)

    def _outstanding_tasks(self, locked_sessions: Sequence[Session]) -> list[PlacementTask]:
        """Decompose every course and drop the tasks locked sessions already cover."""
        covered = Counter((item.course_id, item.session_type) for item in locked_sessions)
        outstanding: list[PlacementTask] = []
        for task in decompose_courses(self.courses.values()):
            key = (task.course_id, task.session_type)
            if covered[key] >= task.block_count:
                covered[key] -= task.block_count
                continue
            outstanding.append(task)
        return outstanding

    def _priority_order(self, tasks: list[PlacementTask]) -> list[PlacementTask]:
        keyed = [
            (
                0 if task.consecutive else 1,      # pairs first
                -TYPE_DIFFICULTY[task.session_type],
                self.random.random(),              # varied layouts on identical input
                index,
            )
            for index, task in enumerate(tasks)
        ]
        keyed.sort()
        return [tasks[item[-1]] for item in keyed]

    def _candidate_days(self, course: Course, instructors: Sequence[Instructor]) -> list[Day]:
        preferred = course.preferred_day
        if preferred is not None and any(item.works_on(preferred) for item in instructors):
            return [preferred]
        return list(DAYS)

    def _new_session(
        self,
        task: PlacementTask,
        instructor: Instructor,
        room: Room,
        day: Day,
        period: Period,
    ) -> Session:
        return Session(
            id=str(uuid.UUID(int=self.random.getrandbits(128), version=4)),
            course_id=task.course_id,
            instructor_id=instructor.id,
            room_id=room.id,
            session_type=task.session_type,
            day=day,
            period=period,
        )

    def _slot_is_valid(
        self,
        context: _SolveContext,
        instructor: Instructor,
        room: Room,
        day: Day,
        period: Period,
    ) -> bool:
        return instructor.is_available(day, period) and context.is_free(instructor.id, room.id, day, period)

    def _place(self, task: PlacementTask, context: _SolveContext) -> FailureReason | None:
        course = self.courses[task.course_id]

        qualified = [
            item
            for item in self.instructors
            if item.can_teach(task.course_id)
            and context.load[item.id] + task.hours <= item.max_hours_per_week + LOAD_TOLERANCE_HOURS
        ]
        if not qualified:
            return FailureReason.no_instructor
        self.random.shuffle(qualified)

        room_type = required_room_type(task.session_type)
        rooms = [item for item in self.rooms if item.type == room_type]
        if not rooms:
            return FailureReason.no_room
        self.random.shuffle(rooms)

        slots = [(day, period) for day in self._candidate_days(course, qualified) for period in PERIOD_SEQUENCE]
        self.random.shuffle(slots)

        for instructor in qualified:
            for room in rooms:
                for day, period in slots:
                    if task.consecutive:
                        partner = pair_partner(period)
                        if partner is None:
                            continue
                        if not (
                            self._slot_is_valid(context, instructor, room, day, period)
                            and self._slot_is_valid(context, instructor, room, day, partner)
                        ):
                            continue
                        context.occupy(self._new_session(task, instructor, room, day, period))
                        context.occupy(self._new_session(task, instructor, room, day, partner))
                    else:
                        if not self._slot_is_valid(context, instructor, room, day, period):
                            continue
                        context.occupy(self._new_session(task, instructor, room, day, period))
                    context.load[instructor.id] += task.hours
                    return None
        return FailureReason.no_time
