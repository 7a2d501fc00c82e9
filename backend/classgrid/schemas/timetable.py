from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from classgrid.services.scheduling.slot_grid import DAYS, GRID_ORDER, SENIOR_YEAR

YearType = Literal["1st Year", "2nd Year", "3rd Year", "4th Year"]
SemesterType = Literal["I", "II"]
BranchType = Literal["CSE", "IT", "ECE", "EEE", "CSD", "AI & ML", "Other"]
EntryKindType = Literal["break", "lunch", "subject", "lab", "free"]

DAY_VALUES = set(DAYS)
FREE_HOUR_TYPES = {"Library", "Sports", "Project", "Others"}
MAX_TEACHERS_PER_PAIR = 2


def _normalize_teacher_ids(values: list[str]) -> list[str]:
    seen: set[str] = set()
    normalized: list[str] = []
    for item in values:
        teacher = " ".join(item.split())
        if not teacher or teacher in seen:
            continue
        seen.add(teacher)
        normalized.append(teacher)
    return normalized


class SubjectTeacherPairPayload(BaseModel):
    id: str | None = Field(default=None, max_length=36)
    subject_name: str = Field(min_length=1, max_length=200)
    teacher_ids: list[str] = Field(default_factory=list, max_length=MAX_TEACHERS_PER_PAIR)
    # Older clients send a single teacher; it is folded into teacher_ids.
    teacher_name: str | None = Field(default=None, max_length=200, exclude=True)
    is_lab: bool = False
    batch: str | None = Field(default=None, max_length=10)

    @field_validator("subject_name")
    @classmethod
    def normalize_subject_name(cls, value: str) -> str:
        name = " ".join(value.split())
        if not name:
            raise ValueError("Subject name cannot be blank")
        return name

    @field_validator("batch")
    @classmethod
    def normalize_batch(cls, value: str | None) -> str | None:
        if value is None:
            return None
        batch = value.strip().upper()
        return batch or None

    @model_validator(mode="after")
    def merge_teacher_fields(self) -> "SubjectTeacherPairPayload":
        teachers = list(self.teacher_ids)
        if self.teacher_name and self.teacher_name.strip() and not teachers:
            teachers = [self.teacher_name]
        self.teacher_ids = _normalize_teacher_ids(teachers)
        self.teacher_name = None
        if not self.teacher_ids:
            raise ValueError(f"{self.subject_name} needs at least one teacher")
        return self


class FreeHourPayload(BaseModel):
    type: str = Field(min_length=1, max_length=50)
    custom_type: str | None = Field(default=None, max_length=50)
    merge_slots: bool = False

    @model_validator(mode="after")
    def validate_custom_type(self) -> "FreeHourPayload":
        if self.type == "Others" and not (self.custom_type or "").strip():
            raise ValueError("Please specify the custom free hour type")
        return self

    @property
    def label(self) -> str:
        custom = (self.custom_type or "").strip()
        return custom or self.type.strip()


class DayOptionsPayload(BaseModel):
    four_continuous_days: bool = False
    use_custom_days: bool = False
    selected_days: list[str] = Field(default_factory=list, max_length=6)

    @field_validator("selected_days")
    @classmethod
    def validate_days(cls, value: list[str]) -> list[str]:
        cleaned = [day.strip() for day in value if day.strip()]
        invalid = [day for day in cleaned if day not in DAY_VALUES]
        if invalid:
            raise ValueError(f"Invalid day value(s): {', '.join(invalid)}")
        return cleaned


class TimetableFormData(BaseModel):
    year: YearType
    semester: SemesterType
    branch: BranchType
    custom_branch: str = Field(default="", max_length=100)
    course_name: str = Field(min_length=1, max_length=200)
    room_number: str = Field(min_length=1, max_length=50)
    academic_year: str = Field(min_length=1, max_length=20)
    class_incharge_name: str = Field(min_length=1, max_length=200)
    mobile_number: str = Field(min_length=1, max_length=20)
    wef_date: date
    subject_teacher_pairs: list[SubjectTeacherPairPayload] = Field(min_length=1, max_length=60)
    free_hours: list[FreeHourPayload] = Field(min_length=1, max_length=10)
    day_options: DayOptionsPayload = Field(default_factory=DayOptionsPayload)
    enable_batch_rotation: bool = True

    @field_validator("mobile_number")
    @classmethod
    def validate_mobile_number(cls, value: str) -> str:
        digits = "".join(char for char in value if char.isdigit())
        if len(digits) < 10:
            raise ValueError("Mobile number must be at least 10 digits")
        return value.strip()

    @model_validator(mode="after")
    def validate_form(self) -> "TimetableFormData":
        if self.branch == "Other" and not self.custom_branch.strip():
            raise ValueError("Custom branch name is required")
        if self.year == SENIOR_YEAR and self.day_options.use_custom_days and not self.day_options.selected_days:
            raise ValueError("Please select at least one day")
        return self

    @property
    def display_branch(self) -> str:
        return self.custom_branch.strip() if self.branch == "Other" else self.branch


class TimetableEntryOut(BaseModel):
    day: str
    time_slot: str
    kind: EntryKindType
    subject_name: str | None = None
    teacher_ids: list[str] = Field(default_factory=list)
    batch: str | None = None
    free_type: str | None = None
    lab_group_id: str | None = None

    @computed_field
    @property
    def teacher_name(self) -> str | None:
        return self.teacher_ids[0] if self.teacher_ids else None

    @computed_field
    @property
    def is_lab(self) -> bool:
        return self.kind == "lab"


class TimetableOut(BaseModel):
    id: str
    year: str
    branch: str
    semester: str
    form_data: TimetableFormData
    entries: list[TimetableEntryOut]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class ShortfallOut(BaseModel):
    subject_name: str
    teacher_ids: list[str]
    is_lab: bool
    batch: str | None = None
    placed: int
    required: int


class GenerateTimetableResponse(BaseModel):
    timetable: TimetableOut
    shortfalls: list[ShortfallOut] = Field(default_factory=list)
    warning: str | None = None


class EntryUpdateRequest(BaseModel):
    day: str
    time_slot: str
    subject_name: str | None = Field(default=None, max_length=200)
    teacher_ids: list[str] = Field(default_factory=list, max_length=MAX_TEACHERS_PER_PAIR)
    free_type: str | None = Field(default=None, max_length=50)

    @field_validator("day")
    @classmethod
    def validate_day(cls, value: str) -> str:
        day = value.strip()
        if day not in DAY_VALUES:
            raise ValueError("Invalid day value")
        return day

    @field_validator("time_slot")
    @classmethod
    def validate_time_slot(cls, value: str) -> str:
        slot = value.strip()
        if slot not in GRID_ORDER:
            raise ValueError("Invalid time slot")
        return slot

    @model_validator(mode="after")
    def validate_cell_content(self) -> "EntryUpdateRequest":
        subject = (self.subject_name or "").strip()
        free_type = (self.free_type or "").strip()
        if bool(subject) == bool(free_type):
            raise ValueError("Provide either subject_name with teachers or free_type")
        self.teacher_ids = _normalize_teacher_ids(self.teacher_ids)
        if subject and not self.teacher_ids:
            raise ValueError("A subject entry needs at least one teacher")
        if free_type and self.teacher_ids:
            raise ValueError("A free hour cannot have teachers")
        self.subject_name = subject or None
        self.free_type = free_type or None
        return self
