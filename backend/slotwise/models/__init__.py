from slotwise.models.calendar import BREAK_PERIOD, DAYS, PERIOD_SEQUENCE, Day, Period  # noqa: F401
from slotwise.models.course import Course, Curriculum  # noqa: F401
from slotwise.models.instructor import Instructor, InstructorRole  # noqa: F401
from slotwise.models.room import Room, RoomType  # noqa: F401
from slotwise.models.session import REQUIRED_ROOM_TYPE, Session, SessionType, required_room_type  # noqa: F401
