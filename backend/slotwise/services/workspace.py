from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from functools import wraps
import logging
import random
import threading

from slotwise.core.exceptions import MoveRejectedError, ResourceNotFoundError, SchedulerError
from slotwise.models.calendar import Day, Period
from slotwise.models.course import Course
from slotwise.models.instructor import Instructor
from slotwise.models.room import Room
from slotwise.models.session import Session
from slotwise.schemas.conflict import ConflictReport
from slotwise.services.conflict_service import ROOM_TYPE_MISMATCH, ConflictService
from slotwise.services.decomposer import truncated_hours
from slotwise.services.history import ScheduleHistory, ScheduleHistoryItem
from slotwise.services.move_validator import MoveValidation, validate_move
from slotwise.services.placement import PlacementEngine, PlacementResult
from slotwise.services.workload import WorkloadEntry, build_workload_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Regeneration:
    result: PlacementResult
    version: ScheduleHistoryItem


def synchronized(method: Callable) -> Callable:
    @wraps(method)
    def wrapper(self: "TimetableWorkspace", *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class TimetableWorkspace:
    """In-memory timetable state shared by the HTTP layer.

    Course changes that invalidate sessions are handled as explicit two-step
    protocols: dependent sessions are removed first, then the schedule is
    regenerated with locked sessions preserved.
    """

    def __init__(
        self,
        *,
        courses: Iterable[Course] = (),
        instructors: Iterable[Instructor] = (),
        rooms: Iterable[Room] = (),
        auto_regenerate: bool = True,
        random_seed: int | None = None,
        history: ScheduleHistory | None = None,
    ) -> None:
        self._courses: dict[str, Course] = {item.id: item for item in courses}
        self._instructors: dict[str, Instructor] = {item.id: item for item in instructors}
        self._rooms: dict[str, Room] = {item.id: item for item in rooms}
        self.history = history if history is not None else ScheduleHistory()
        self.auto_regenerate = auto_regenerate
        self.random = random.Random(random_seed)
        self._lock = threading.RLock()

    @property
    def courses(self) -> list[Course]:
        return list(self._courses.values())

    @property
    def instructors(self) -> list[Instructor]:
        return list(self._instructors.values())

    @property
    def rooms(self) -> list[Room]:
        return list(self._rooms.values())

    @property
    def schedule(self) -> list[Session]:
        return list(self.history.active_sessions)

    def get_course(self, course_id: str) -> Course:
        course = self._courses.get(course_id)
        if course is None:
            raise ResourceNotFoundError("Course", course_id)
        return course

    def get_instructor(self, instructor_id: str) -> Instructor:
        instructor = self._instructors.get(instructor_id)
        if instructor is None:
            raise ResourceNotFoundError("Instructor", instructor_id)
        return instructor

    def get_room(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise ResourceNotFoundError("Room", room_id)
        return room

    def get_session(self, session_id: str) -> Session:
        session = next((item for item in self.history.active_sessions if item.id == session_id), None)
        if session is None:
            raise ResourceNotFoundError("Session", session_id)
        return session

    # -- regeneration -------------------------------------------------------

    @synchronized
    def regenerate(self, *, preserve_locked: bool = True, seed: int | None = None) -> Regeneration:
        rng = random.Random(seed) if seed is not None else self.random
        engine = PlacementEngine(
            courses=self.courses,
            instructors=self.instructors,
            rooms=self.rooms,
            rng=rng,
        )
        result = engine.run(self.schedule, preserve_locked=preserve_locked)
        version = self.history.record_version(result.sessions, len(result.failures))
        return Regeneration(result=result, version=version)

    def _after_course_change(self) -> Regeneration | None:
        if not self.auto_regenerate:
            return None
        return self.regenerate(preserve_locked=True)

    # -- courses --------------------------------------------------------------

    @synchronized
    def add_courses(self, courses: Iterable[Course]) -> Regeneration | None:
        added = list(courses)
        for course in added:
            if course.id in self._courses:
                raise SchedulerError(f"Course id {course.id} already exists")
        for course in added:
            self._courses[course.id] = course
            leftover = truncated_hours(course)
            if leftover:
                logger.warning(
                    "Course %s declares %sh that do not fit whole periods and will not be scheduled",
                    course.code,
                    leftover,
                )
        return self._after_course_change()

    @synchronized
    def update_course(self, course: Course, instructor_ids: Iterable[str] | None = None) -> Course:
        """Replace ``course`` and optionally its instructor assignment.

        Instructor ids are checked before anything is written, so a rejected
        update leaves the course, its sessions and the capabilities untouched.
        """
        self.get_course(course.id)
        if instructor_ids is not None:
            instructor_ids = list(instructor_ids)
            self._ensure_known_instructors(instructor_ids)
        self._courses[course.id] = course
        self.prune_inactive_components(course)
        if instructor_ids is not None:
            self.assign_course_instructors(course.id, instructor_ids)
        return course

    @synchronized
    def delete_course(self, course_id: str) -> Regeneration | None:
        self.get_course(course_id)
        del self._courses[course_id]
        self.remove_course_sessions(course_id)
        return self._after_course_change()

    @synchronized
    def prune_inactive_components(self, course: Course) -> int:
        """Drop sessions of ``course`` whose component is no longer active."""
        kept = [
            item
            for item in self.history.active_sessions
            if item.course_id != course.id or course.has_component(item.session_type)
        ]
        return self._replace_schedule(kept)

    @synchronized
    def remove_course_sessions(self, course_id: str) -> int:
        kept = [item for item in self.history.active_sessions if item.course_id != course_id]
        return self._replace_schedule(kept)

    @synchronized
    def assign_course_instructors(self, course_id: str, instructor_ids: Iterable[str]) -> None:
        wanted = set(instructor_ids)
        self._ensure_known_instructors(wanted)
        for instructor in self.instructors:
            capable = set(instructor.capable_course_ids)
            if instructor.id in wanted:
                capable.add(course_id)
            else:
                capable.discard(course_id)
            if capable != instructor.capable_course_ids:
                self._instructors[instructor.id] = replace(instructor, capable_course_ids=frozenset(capable))

    def _ensure_known_instructors(self, instructor_ids: Iterable[str]) -> None:
        unknown = set(instructor_ids) - set(self._instructors)
        if unknown:
            raise SchedulerError(
                "Unknown instructor id(s) for course assignment",
                details={"instructor_ids": sorted(unknown)},
            )

    def _replace_schedule(self, kept: list[Session]) -> int:
        removed = len(self.history.active_sessions) - len(kept)
        if removed:
            self.history.set_active(kept)
            logger.info("Removed %s dependent session(s)", removed)
        return removed

    # -- instructors and rooms ---------------------------------------------------

    @synchronized
    def add_instructors(self, instructors: Iterable[Instructor]) -> list[Instructor]:
        added = list(instructors)
        for instructor in added:
            if instructor.id in self._instructors:
                raise SchedulerError(f"Instructor id {instructor.id} already exists")
        for instructor in added:
            self._instructors[instructor.id] = instructor
        return added

    @synchronized
    def update_instructor(self, instructor: Instructor) -> Instructor:
        self.get_instructor(instructor.id)
        self._instructors[instructor.id] = instructor
        return instructor

    @synchronized
    def delete_instructor(self, instructor_id: str) -> None:
        self.get_instructor(instructor_id)
        del self._instructors[instructor_id]

    @synchronized
    def add_rooms(self, rooms: Iterable[Room]) -> list[Room]:
        added = list(rooms)
        for room in added:
            if room.id in self._rooms:
                raise SchedulerError(f"Room id {room.id} already exists")
        for room in added:
            self._rooms[room.id] = room
        return added

    @synchronized
    def update_room(self, room: Room) -> Room:
        self.get_room(room.id)
        self._rooms[room.id] = room
        return room

    @synchronized
    def delete_room(self, room_id: str) -> None:
        self.get_room(room_id)
        del self._rooms[room_id]

    # -- interactive editing ---------------------------------------------------

    def check_move(self, session_id: str, day: Day, period: Period) -> MoveValidation:
        session = self.get_session(session_id)
        return validate_move(session, day, period, self.schedule, self.instructors, self.rooms)

    @synchronized
    def move_session(self, session_id: str, day: Day, period: Period) -> Session:
        check = self.check_move(session_id, day, period)
        if not check.valid:
            raise MoveRejectedError(session_id, check.reason or "Invalid move")
        moved = self.get_session(session_id).moved_to(day, period)
        self._swap_session(moved)
        return moved

    @synchronized
    def toggle_lock(self, session_id: str) -> Session:
        session = self.get_session(session_id)
        toggled = session.with_lock(not session.locked)
        self._swap_session(toggled)
        return toggled

    @synchronized
    def delete_session(self, session_id: str) -> None:
        self.get_session(session_id)
        self.history.set_active(item for item in self.history.active_sessions if item.id != session_id)

    def _swap_session(self, updated: Session) -> None:
        self.history.set_active(
            updated if item.id == updated.id else item for item in self.history.active_sessions
        )

    @synchronized
    def restore_version(self, version_id: str) -> ScheduleHistoryItem | None:
        return self.history.restore(version_id)

    # -- reporting ----------------------------------------------------------------

    def conflicts(self, *, max_suggestions: int = 0) -> ConflictReport:
        service = ConflictService(self.schedule, self.instructors, self.rooms)
        report = service.detect_conflicts()
        if max_suggestions > 0:
            seen: set[str] = set()
            for conflict in report.conflicts:
                if conflict.session_id in seen or conflict.message.startswith(ROOM_TYPE_MISMATCH):
                    continue
                seen.add(conflict.session_id)
                report.suggested_resolutions.extend(service.generate_resolutions(conflict, limit=max_suggestions))
        return report

    def workload(self) -> list[WorkloadEntry]:
        return build_workload_report(self.instructors, self.schedule)
