import uuid

from pydantic import BaseModel, Field, field_validator, model_validator

from slotwise.models.calendar import DAYS, Day
from slotwise.models.instructor import Instructor, InstructorRole

WORKING_DAYS_PER_WEEK = 5

DEFAULT_WORKING_DAYS = [Day.monday, Day.tuesday, Day.wednesday, Day.thursday, Day.friday]
DEFAULT_FREE_DAY = Day.friday
DEFAULT_MAX_HOURS: dict[InstructorRole, float] = {
    InstructorRole.lecturer: 10,
    InstructorRole.teaching_assistant: 18,
}


class InstructorBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    role: InstructorRole
    department: str = Field(min_length=1, max_length=200)
    capable_course_ids: list[str] = Field(default_factory=list, max_length=500)
    working_days: list[Day]
    free_day: Day
    max_hours_per_week: float = Field(gt=0, le=80)
    can_teach_break: bool = False

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, value: list[Day]) -> list[Day]:
        unique = set(value)
        if len(unique) != WORKING_DAYS_PER_WEEK or len(value) != WORKING_DAYS_PER_WEEK:
            raise ValueError("Instructors must be assigned exactly 5 distinct working days")
        return [day for day in DAYS if day in unique]

    @model_validator(mode="after")
    def validate_free_day(self) -> "InstructorBase":
        if self.free_day not in self.working_days:
            raise ValueError("The free campus day must be one of the working days")
        return self

    def to_model(self, instructor_id: str) -> Instructor:
        return Instructor(
            id=instructor_id,
            name=self.name,
            role=self.role,
            department=self.department,
            capable_course_ids=frozenset(self.capable_course_ids),
            working_days=frozenset(self.working_days),
            free_day=self.free_day,
            max_hours_per_week=self.max_hours_per_week,
            can_teach_break=self.can_teach_break,
        )


class InstructorCreate(InstructorBase):
    pass


class InstructorUpdate(InstructorBase):
    pass


class InstructorBulkCreate(BaseModel):
    names: list[str] = Field(min_length=1, max_length=500)
    role: InstructorRole = InstructorRole.lecturer
    department: str = Field(default="General", min_length=1, max_length=200)

    def to_models(self) -> list[Instructor]:
        return [
            Instructor(
                id=str(uuid.uuid4()),
                name=name.strip(),
                role=self.role,
                department=self.department,
                capable_course_ids=frozenset(),
                working_days=frozenset(DEFAULT_WORKING_DAYS),
                free_day=DEFAULT_FREE_DAY,
                max_hours_per_week=DEFAULT_MAX_HOURS[self.role],
            )
            for name in self.names
            if name.strip()
        ]


class InstructorOut(InstructorBase):
    id: str
    assigned_hours: float = 0.0

    @classmethod
    def from_model(cls, instructor: Instructor, assigned_hours: float) -> "InstructorOut":
        return cls(
            id=instructor.id,
            name=instructor.name,
            role=instructor.role,
            department=instructor.department,
            capable_course_ids=sorted(instructor.capable_course_ids),
            working_days=[day for day in DAYS if day in instructor.working_days],
            free_day=instructor.free_day,
            max_hours_per_week=instructor.max_hours_per_week,
            can_teach_break=instructor.can_teach_break,
            assigned_hours=assigned_hours,
        )
