from fastapi import APIRouter, Depends, HTTPException, status

from classgrid.api.deps import get_faculty_repository, get_timetable_repository
from classgrid.core.config import Settings, get_settings
from classgrid.models.faculty import Faculty
from classgrid.schemas.workload import FacultyWorkloadOut
from classgrid.services.repository import FacultyRepository, TimetableRepository
from classgrid.services.workload import WorkloadValidator

router = APIRouter()


def _workload_out(validator: WorkloadValidator, faculty: Faculty) -> FacultyWorkloadOut:
    summary = validator.summary(faculty.name)
    return FacultyWorkloadOut(
        id=faculty.id,
        name=faculty.name,
        short_name=faculty.short_name,
        assigned_subjects=summary.assigned_subjects,
        remaining_capacity=summary.remaining_capacity,
        max_subjects=summary.max_subjects,
        is_available=summary.is_available,
    )


@router.get("/", response_model=list[FacultyWorkloadOut])
def list_faculty_workloads(
    faculty_repo: FacultyRepository = Depends(get_faculty_repository),
    timetable_repo: TimetableRepository = Depends(get_timetable_repository),
    settings: Settings = Depends(get_settings),
) -> list[FacultyWorkloadOut]:
    validator = WorkloadValidator(timetable_repo.stored_schedules(), cap=settings.workload_subject_cap)
    return [_workload_out(validator, item) for item in faculty_repo.list()]


@router.get("/{faculty_name}", response_model=FacultyWorkloadOut)
def get_faculty_workload(
    faculty_name: str,
    faculty_repo: FacultyRepository = Depends(get_faculty_repository),
    timetable_repo: TimetableRepository = Depends(get_timetable_repository),
    settings: Settings = Depends(get_settings),
) -> FacultyWorkloadOut:
    faculty = faculty_repo.get_by_name(faculty_name)
    if faculty is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty member not found")
    validator = WorkloadValidator(timetable_repo.stored_schedules(), cap=settings.workload_subject_cap)
    return _workload_out(validator, faculty)
