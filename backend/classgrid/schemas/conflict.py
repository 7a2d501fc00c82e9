from pydantic import BaseModel
from typing import Literal, List, Optional

class ConflictDetail(BaseModel):
    id: str
    conflict_type: Literal[
        "faculty_conflict",
        "workload_overflow",
    ]
    description: str
    severity: Literal["hard", "soft"]
    teacher: Optional[str] = None
    day: Optional[str] = None
    time_slot: Optional[str] = None
    affected_timetables: List[str]  # Timetable ids involved

class ConflictReport(BaseModel):
    conflicts: List[ConflictDetail]
