import logging
from time import perf_counter

from fastapi import APIRouter, Depends, HTTPException, Query, status

from classgrid.api.deps import get_timetable_engine, get_timetable_repository
from classgrid.core.config import Settings, get_settings
from classgrid.core.exceptions import (
    AppError,
    DuplicateTimetableError,
    ResourceNotFoundError,
    WorkloadCapExceededError,
)
from classgrid.models.timetable import Timetable
from classgrid.schemas.conflict import ConflictReport
from classgrid.schemas.timetable import (
    BranchType,
    EntryUpdateRequest,
    GenerateTimetableResponse,
    SemesterType,
    TimetableFormData,
    TimetableOut,
    YearType,
)
from classgrid.services.conflict_service import ConflictService
from classgrid.services.repository import TimetableRepository
from classgrid.services.scheduling.engine import TimetableEngine
from classgrid.services.scheduling.models import ScheduleEntry, StoredSchedule
from classgrid.services.scheduling.slot_grid import is_reserved_slot, slot_sort_key
from classgrid.services.timetables import (
    generation_request_from_form,
    requirements_from_form,
    shortfall_payload,
    shortfall_warning,
)
from classgrid.services.workload import WorkloadValidator, WorkloadViolation

router = APIRouter()

logger = logging.getLogger(__name__)


def _get_timetable_or_404(repo: TimetableRepository, timetable_id: str) -> Timetable:
    timetable = repo.get(timetable_id)
    if timetable is None:
        raise ResourceNotFoundError("Timetable", timetable_id)
    return timetable


@router.get("/", response_model=list[TimetableOut])
def list_timetables(
    year: YearType | None = Query(default=None),
    branch: BranchType | None = Query(default=None),
    semester: SemesterType | None = Query(default=None),
    repo: TimetableRepository = Depends(get_timetable_repository),
) -> list[TimetableOut]:
    return repo.filter(year=year, branch=branch, semester=semester)


@router.post("/generate", response_model=GenerateTimetableResponse, status_code=status.HTTP_201_CREATED)
def generate_timetable(
    payload: TimetableFormData,
    repo: TimetableRepository = Depends(get_timetable_repository),
    engine: TimetableEngine = Depends(get_timetable_engine),
    settings: Settings = Depends(get_settings),
) -> GenerateTimetableResponse:
    started = perf_counter()
    logger.info(
        "TIMETABLE GENERATION START | year=%s | branch=%s | semester=%s | pairs=%s | rotation=%s",
        payload.year,
        payload.branch,
        payload.semester,
        len(payload.subject_teacher_pairs),
        payload.enable_batch_rotation,
    )
    try:
        if repo.find_duplicate(payload.year, payload.branch, payload.semester) is not None:
            raise DuplicateTimetableError(payload.year, payload.branch, payload.semester)

        schedules = repo.stored_schedules()
        validator = WorkloadValidator(schedules, cap=settings.workload_subject_cap)
        violations = validator.check_requirements(requirements_from_form(payload))
        if violations:
            raise WorkloadCapExceededError([item.to_dict() for item in violations], cap=validator.cap)

        busy = ConflictService(schedules).busy_commitments()
        result = engine.generate(generation_request_from_form(payload, busy))

        timetable = repo.create(
            year=payload.year,
            branch=payload.branch,
            semester=payload.semester,
            form_data=payload.model_dump(mode="json"),
            entries=result.entries,
        )
        elapsed_ms = int((perf_counter() - started) * 1000)
        logger.info(
            "TIMETABLE GENERATION COMPLETE | timetable_id=%s | year=%s | branch=%s | semester=%s | entries=%s | shortfalls=%s | wall_ms=%s",
            timetable.id,
            payload.year,
            payload.branch,
            payload.semester,
            len(result.entries),
            len(result.shortfalls),
            elapsed_ms,
        )
        return GenerateTimetableResponse(
            timetable=TimetableOut.model_validate(timetable),
            shortfalls=[shortfall_payload(item) for item in result.shortfalls],
            warning=shortfall_warning(result.shortfalls),
        )
    except AppError as exc:
        logger.warning(
            "TIMETABLE GENERATION REJECTED | year=%s | branch=%s | semester=%s | reason=%s",
            payload.year,
            payload.branch,
            payload.semester,
            exc.message,
        )
        raise
    except Exception:
        elapsed_ms = int((perf_counter() - started) * 1000)
        logger.exception(
            "TIMETABLE GENERATION FAILED | year=%s | branch=%s | semester=%s | wall_ms=%s",
            payload.year,
            payload.branch,
            payload.semester,
            elapsed_ms,
        )
        raise


@router.get("/conflicts", response_model=ConflictReport)
def timetable_conflicts(repo: TimetableRepository = Depends(get_timetable_repository)) -> ConflictReport:
    return ConflictService(repo.stored_schedules()).detect_conflicts()


@router.get("/faculty/{teacher_name}", response_model=list[TimetableOut])
def timetables_for_faculty(
    teacher_name: str,
    repo: TimetableRepository = Depends(get_timetable_repository),
) -> list[TimetableOut]:
    return repo.for_teacher(teacher_name.strip())


@router.get("/{timetable_id}", response_model=TimetableOut)
def get_timetable(
    timetable_id: str,
    repo: TimetableRepository = Depends(get_timetable_repository),
) -> TimetableOut:
    return _get_timetable_or_404(repo, timetable_id)


@router.put("/{timetable_id}/entries", response_model=TimetableOut)
def update_timetable_entry(
    timetable_id: str,
    payload: EntryUpdateRequest,
    repo: TimetableRepository = Depends(get_timetable_repository),
    settings: Settings = Depends(get_settings),
) -> TimetableOut:
    timetable = _get_timetable_or_404(repo, timetable_id)
    entries = [ScheduleEntry.from_dict(item) for item in timetable.entries]

    if is_reserved_slot(payload.time_slot):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Break and lunch slots cannot be edited")
    if payload.day not in {entry.day for entry in entries}:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{payload.day} is not a working day of this timetable")
    for entry in entries:
        if entry.day == payload.day and entry.is_lab and payload.time_slot in entry.covered_slots():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"{payload.day} {payload.time_slot} is part of the {entry.subject_name} lab block",
            )

    if payload.subject_name:
        schedules = repo.stored_schedules()
        conflicts = ConflictService(schedules)
        busy = [
            teacher_id
            for teacher_id in payload.teacher_ids
            if not conflicts.is_teacher_available(teacher_id, payload.day, payload.time_slot, exclude_id=timetable.id)
        ]
        if busy:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"{', '.join(busy)} already teaches another class on {payload.day} {payload.time_slot}",
            )
        new_entry = ScheduleEntry(
            day=payload.day,
            time_slot=payload.time_slot,
            kind="subject",
            subject_name=payload.subject_name,
            teacher_ids=tuple(payload.teacher_ids),
        )
    else:
        schedules = []
        new_entry = ScheduleEntry(day=payload.day, time_slot=payload.time_slot, kind="free", free_type=payload.free_type)

    updated = [entry for entry in entries if (entry.day, entry.time_slot) != (payload.day, payload.time_slot)]
    updated.append(new_entry)
    updated.sort(key=lambda entry: slot_sort_key(entry.day, entry.time_slot))

    if new_entry.kind == "subject":
        _check_edit_workload(timetable.id, schedules, updated, new_entry, settings.workload_subject_cap)

    logger.info(
        "TIMETABLE ENTRY UPDATED | timetable_id=%s | day=%s | slot=%s | kind=%s | subject=%s",
        timetable.id,
        payload.day,
        payload.time_slot,
        new_entry.kind,
        new_entry.subject_name,
    )
    return repo.replace_entries(timetable, updated)


def _check_edit_workload(
    timetable_id: str,
    schedules: list[StoredSchedule],
    updated: list[ScheduleEntry],
    new_entry: ScheduleEntry,
    cap: int,
) -> None:
    before = WorkloadValidator(schedules, cap=cap)
    after = WorkloadValidator(
        [item for item in schedules if item.schedule_id != timetable_id]
        + [StoredSchedule(schedule_id=timetable_id, entries=tuple(updated))],
        cap=cap,
    )
    violations: list[WorkloadViolation] = []
    for teacher_id in new_entry.teacher_ids:
        existing = before.count_non_lab_assignments(teacher_id)
        total = after.count_non_lab_assignments(teacher_id)
        if total > cap and total > existing:
            violations.append(WorkloadViolation(teacher=teacher_id, existing=existing, requested=total - existing, cap=cap))
    if violations:
        raise WorkloadCapExceededError([item.to_dict() for item in violations], cap=cap)


@router.delete("/{timetable_id}")
def delete_timetable(
    timetable_id: str,
    repo: TimetableRepository = Depends(get_timetable_repository),
) -> dict:
    timetable = _get_timetable_or_404(repo, timetable_id)
    repo.delete(timetable)
    logger.info("TIMETABLE DELETED | timetable_id=%s", timetable_id)
    return {"success": True}
