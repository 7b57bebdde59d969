from collections import defaultdict
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from slotwise.models.calendar import BREAK_PERIOD, PERIOD_SEQUENCE, Day, Period, pair_partner
from slotwise.models.instructor import Instructor
from slotwise.models.room import Room
from slotwise.models.session import Session, required_room_type
from slotwise.schemas.conflict import Conflict, ConflictReport, ResolutionAction
from slotwise.services.move_validator import validate_move

logger = logging.getLogger(__name__)

ROOM_TYPE_MISMATCH = "Room type mismatch"


class ConflictService:
    def __init__(self, sessions: Sequence[Session], instructors: Iterable[Instructor], rooms: Iterable[Room]):
        self.sessions = list(sessions)
        self.instructor_map: Dict[str, Instructor] = {item.id: item for item in instructors}
        self.room_map: Dict[str, Room] = {item.id: item for item in rooms}

    def detect_conflicts(self) -> ConflictReport:
        conflicts: List[Conflict] = []

        buckets: Dict[Tuple[Day, Period], List[Session]] = defaultdict(list)
        for session in self.sessions:
            buckets[(session.day, session.period)].append(session)

        for bucket in buckets.values():
            conflicts.extend(self._double_bookings(bucket))

        for session in self.sessions:
            conflicts.extend(self._constraint_violations(session))

        if conflicts:
            logger.debug("Detected %s conflict(s) across %s session(s)", len(conflicts), len(self.sessions))
        return ConflictReport(conflicts=conflicts, suggested_resolutions=[])

    def _double_bookings(self, bucket: List[Session]) -> List[Conflict]:
        conflicts: List[Conflict] = []

        by_room: Dict[str, List[Session]] = defaultdict(list)
        for session in bucket:
            if session.room_id:
                by_room[session.room_id].append(session)
        for room_id, affected in by_room.items():
            if len(affected) < 2:
                continue
            room = self.room_map.get(room_id)
            room_name = room.name if room else "Unknown Room"
            conflicts.extend(
                Conflict(session_id=item.id, kind="DoubleBooking", message=f"Room {room_name} is double booked.")
                for item in affected
            )

        by_instructor: Dict[str, List[Session]] = defaultdict(list)
        for session in bucket:
            by_instructor[session.instructor_id].append(session)
        for instructor_id, affected in by_instructor.items():
            if len(affected) < 2:
                continue
            instructor = self.instructor_map.get(instructor_id)
            instructor_name = instructor.name if instructor else "Unknown"
            conflicts.extend(
                Conflict(session_id=item.id, kind="DoubleBooking", message=f"{instructor_name} is double booked.")
                for item in affected
            )
        return conflicts

    def _constraint_violations(self, session: Session) -> List[Conflict]:
        conflicts: List[Conflict] = []

        def violation(message: str) -> Conflict:
            return Conflict(session_id=session.id, kind="ConstraintViolation", message=message)

        instructor = self.instructor_map.get(session.instructor_id)
        if instructor:
            if session.day not in instructor.working_days:
                conflicts.append(violation(f"Not a working day for {instructor.name}"))
            if session.day == instructor.free_day:
                conflicts.append(violation(f"Free day violation for {instructor.name}"))
            if session.period == BREAK_PERIOD and not instructor.can_teach_break:
                conflicts.append(violation(f"Break violation for {instructor.name}"))

        room = self.room_map.get(session.room_id) if session.room_id else None
        if room and room.type != required_room_type(session.session_type):
            conflicts.append(
                violation(f"{ROOM_TYPE_MISMATCH}: {session.session_type.value} in {room.type.value}")
            )
        return conflicts

    def generate_resolutions(self, conflict: Conflict, limit: int = 3) -> List[ResolutionAction]:
        """Suggest free slots the conflicting session could be moved to.

        Only single-session moves are proposed. Locked sessions and halves of a
        consecutive pair get no suggestions, and neither do room type
        mismatches, which no change of day or period can fix.
        """
        resolutions: List[ResolutionAction] = []
        if limit <= 0 or conflict.message.startswith(ROOM_TYPE_MISMATCH):
            return resolutions
        session = next((item for item in self.sessions if item.id == conflict.session_id), None)
        if session is None or session.locked or self._pair_mate(session) is not None:
            return resolutions

        for day in Day:
            for period in PERIOD_SEQUENCE:
                if (day, period) == (session.day, session.period):
                    continue
                check = validate_move(
                    session,
                    day,
                    period,
                    self.sessions,
                    self.instructor_map.values(),
                    self.room_map.values(),
                )
                if not check.valid:
                    continue
                resolutions.append(
                    ResolutionAction(
                        description=f"Move to {day.value} {period.value}",
                        target_session_id=session.id,
                        day=day,
                        period=period,
                    )
                )
                if len(resolutions) >= limit:
                    return resolutions
        return resolutions

    def _pair_mate(self, session: Session) -> Optional[Session]:
        """Return the other half of the consecutive pair ``session`` belongs to."""
        for other in self.sessions:
            if other.id == session.id or other.day != session.day:
                continue
            if (other.course_id, other.session_type, other.instructor_id, other.room_id) != (
                session.course_id,
                session.session_type,
                session.instructor_id,
                session.room_id,
            ):
                continue
            if pair_partner(session.period) == other.period or pair_partner(other.period) == session.period:
                return other
        return None
