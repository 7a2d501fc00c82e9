from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from classgrid.schemas.timetable import BranchType, YearType


class SubjectBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    year: YearType
    branch: BranchType
    is_lab: bool = False
    credit_hours: int = Field(default=3, ge=0, le=20)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        name = " ".join(value.split())
        if not name:
            raise ValueError("Subject name cannot be blank")
        return name


class SubjectCreate(SubjectBase):
    pass


class SubjectUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    year: YearType | None = None
    branch: BranchType | None = None
    is_lab: bool | None = None
    credit_hours: int | None = Field(default=None, ge=0, le=20)


class SubjectOut(SubjectBase):
    id: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
