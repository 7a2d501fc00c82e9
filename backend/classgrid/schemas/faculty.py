from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator


def initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part).upper()


class FacultyBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    short_name: str | None = Field(default=None, max_length=20)
    department: str = Field(default="", max_length=200)
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        name = " ".join(value.split())
        if not name:
            raise ValueError("Faculty name cannot be blank")
        return name

    @model_validator(mode="after")
    def default_short_name(self) -> "FacultyBase":
        short_name = (self.short_name or "").strip()
        self.short_name = short_name or initials(self.name)
        return self


class FacultyCreate(FacultyBase):
    pass


class FacultyUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    short_name: str | None = Field(default=None, min_length=1, max_length=20)
    department: str | None = Field(default=None, max_length=200)
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def normalize_optional_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        name = " ".join(value.split())
        if not name:
            raise ValueError("Faculty name cannot be blank")
        return name


class FacultyOut(FacultyBase):
    id: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
