import uuid

from pydantic import BaseModel, Field, field_validator, model_validator

from slotwise.models.calendar import Day
from slotwise.models.course import Course, Curriculum
from slotwise.services.decomposer import DOUBLE_PERIOD_HOURS

# Active components entered with (almost) no hours default to one double period.
MIN_ENTERED_HOURS = 0.1


class CourseBase(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    curriculum: Curriculum = Curriculum.new
    has_lecture: bool = False
    has_section: bool = False
    has_lab: bool = False
    hours_lecture: float = Field(default=0.0, ge=0, le=40)
    hours_section: float = Field(default=0.0, ge=0, le=40)
    hours_lab: float = Field(default=0.0, ge=0, le=40)
    preferred_day: Day | None = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        code = value.strip().upper()
        if not code:
            raise ValueError("code must not be blank")
        return code

    @model_validator(mode="after")
    def sanitize_components(self) -> "CourseBase":
        for flag, hours in (
            ("has_lecture", "hours_lecture"),
            ("has_section", "hours_section"),
            ("has_lab", "hours_lab"),
        ):
            if not getattr(self, flag):
                setattr(self, hours, 0.0)
            elif getattr(self, hours) <= MIN_ENTERED_HOURS:
                setattr(self, hours, DOUBLE_PERIOD_HOURS)

        if self.hours_lecture + self.hours_section + self.hours_lab == 0:
            raise ValueError("Course must have at least one component with hours assigned")
        return self

    def to_model(self, course_id: str) -> Course:
        return Course(id=course_id, **self.model_dump(exclude={"instructor_ids"}))


class CourseCreate(CourseBase):
    instructor_ids: list[str] | None = Field(default=None, max_length=200)


class CourseUpdate(CourseCreate):
    pass


class CourseBulkCreate(BaseModel):
    lines: list[str] = Field(min_length=1, max_length=500)

    def to_models(self) -> list[Course]:
        """Parse ``CODE - Name`` lines into lecture + section courses."""
        courses: list[Course] = []
        for line in self.lines:
            text = line.strip()
            if not text:
                continue
            if "-" in text:
                code, _, name = text.partition("-")
                code = code.strip().upper()
                name = name.strip()
            else:
                code = f"C{uuid.uuid4().int % 100_000:05d}"
                name = text
            if not name or not code:
                continue
            courses.append(
                Course(
                    id=str(uuid.uuid4()),
                    code=code,
                    name=name,
                    has_lecture=True,
                    has_section=True,
                    hours_lecture=DOUBLE_PERIOD_HOURS,
                    hours_section=DOUBLE_PERIOD_HOURS,
                )
            )
        return courses


class CourseOut(CourseBase):
    id: str
    total_hours: float

    model_config = {"from_attributes": True}
