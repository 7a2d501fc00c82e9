from pydantic import BaseModel


class FacultyWorkloadOut(BaseModel):
    id: str | None = None
    name: str
    short_name: str | None = None
    assigned_subjects: int
    remaining_capacity: int
    max_subjects: int
    is_available: bool
