"""Seed sample faculty, subjects and two generated timetables for ClassGrid.

Run:
  PYTHONPATH=backend python scripts/seed_sample_data.py
"""

from __future__ import annotations

import logging
import os
import random

from classgrid.core.config import get_settings
from classgrid.core.exceptions import AppError
from classgrid.core.logging import configure_logging
from classgrid.db.bootstrap import ensure_runtime_schema
from classgrid.db.session import SessionLocal
from classgrid.models.faculty import Faculty
from classgrid.models.subject import Subject
from classgrid.schemas.timetable import TimetableFormData
from classgrid.services.conflict_service import ConflictService
from classgrid.services.repository import FacultyRepository, SubjectRepository, TimetableRepository
from classgrid.services.scheduling.engine import TimetableEngine
from classgrid.services.timetables import generation_request_from_form, requirements_from_form
from classgrid.services.workload import WorkloadValidator

logger = logging.getLogger("classgrid.seed")

SEED = int(os.getenv("SEED_RANDOM_SEED", "2024"))
ACADEMIC_YEAR = os.getenv("SEED_ACADEMIC_YEAR", "2026-27").strip() or "2026-27"

SAMPLE_FACULTY = [
    ("Dr. Rajesh Kumar", "CSE"),
    ("Dr. Priya Singh", "CSE"),
    ("Prof. Amit Sharma", "CSE"),
    ("Prof. Sunita Patel", "CSE"),
    ("Dr. Vikram Joshi", "CSE"),
    ("Prof. Neha Gupta", "IT"),
    ("Dr. Manoj Verma", "IT"),
    ("Prof. Deepa Mishra", "ECE"),
    ("Dr. Sanjay Agarwal", "ECE"),
    ("Prof. Ritu Choudhary", "EEE"),
]

SAMPLE_SUBJECTS = [
    ("Mathematics-I", "1st Year", "CSE", False),
    ("Engineering Physics", "1st Year", "CSE", False),
    ("Programming in C", "1st Year", "CSE", False),
    ("C Programming Lab", "1st Year", "CSE", True),
    ("Data Structures", "2nd Year", "CSE", False),
    ("Discrete Mathematics", "2nd Year", "CSE", False),
    ("Digital Logic Design", "2nd Year", "CSE", False),
    ("Data Structures Lab", "2nd Year", "CSE", True),
    ("Digital Logic Lab", "2nd Year", "CSE", True),
    ("Operating Systems", "3rd Year", "IT", False),
    ("Computer Networks", "3rd Year", "IT", False),
    ("Networks Lab", "3rd Year", "IT", True),
]

SAMPLE_TIMETABLES = [
    {
        "year": "2nd Year",
        "semester": "I",
        "branch": "CSE",
        "course_name": "B.Tech Computer Science and Engineering",
        "room_number": "CSE-201",
        "class_incharge_name": "Dr. Priya Singh",
        "mobile_number": "9876543210",
        "wef_date": "2026-07-01",
        "subject_teacher_pairs": [
            {"subject_name": "Data Structures", "teacher_ids": ["Dr. Rajesh Kumar"]},
            {"subject_name": "Discrete Mathematics", "teacher_ids": ["Dr. Priya Singh"]},
            {"subject_name": "Digital Logic Design", "teacher_ids": ["Prof. Amit Sharma"]},
            {"subject_name": "Data Structures Lab", "teacher_ids": ["Dr. Rajesh Kumar", "Prof. Sunita Patel"], "is_lab": True, "batch": "B1"},
            {"subject_name": "Digital Logic Lab", "teacher_ids": ["Dr. Vikram Joshi"], "is_lab": True, "batch": "B2"},
        ],
        "free_hours": [{"type": "Library"}, {"type": "Sports"}],
    },
    {
        "year": "3rd Year",
        "semester": "I",
        "branch": "IT",
        "course_name": "B.Tech Information Technology",
        "room_number": "IT-301",
        "class_incharge_name": "Prof. Neha Gupta",
        "mobile_number": "9123456780",
        "wef_date": "2026-07-01",
        "subject_teacher_pairs": [
            {"subject_name": "Operating Systems", "teacher_ids": ["Dr. Manoj Verma"]},
            {"subject_name": "Computer Networks", "teacher_ids": ["Prof. Neha Gupta", "Dr. Rajesh Kumar"]},
            {"subject_name": "Networks Lab", "teacher_ids": ["Prof. Neha Gupta"], "is_lab": True},
        ],
        "free_hours": [{"type": "Project"}, {"type": "Library"}],
    },
]


def seed_faculty(repo: FacultyRepository) -> int:
    created = 0
    for name, department in SAMPLE_FACULTY:
        if repo.get_by_name(name) is not None:
            continue
        short_name = "".join(part[0] for part in name.split()[1:]).upper()
        repo.save(Faculty(name=name, short_name=short_name, department=department))
        created += 1
    return created


def seed_subjects(repo: SubjectRepository) -> int:
    created = 0
    for name, year, branch, is_lab in SAMPLE_SUBJECTS:
        if repo.find_duplicate(name, year, branch) is not None:
            continue
        repo.save(Subject(name=name, year=year, branch=branch, is_lab=is_lab))
        created += 1
    return created


def seed_timetables(repo: TimetableRepository, engine: TimetableEngine) -> int:
    settings = get_settings()
    created = 0
    for raw in SAMPLE_TIMETABLES:
        form = TimetableFormData.model_validate({**raw, "academic_year": ACADEMIC_YEAR})
        if repo.find_duplicate(form.year, form.branch, form.semester) is not None:
            continue
        schedules = repo.stored_schedules()
        violations = WorkloadValidator(schedules, cap=settings.workload_subject_cap).check_requirements(
            requirements_from_form(form)
        )
        if violations:
            logger.warning("SEED TIMETABLE SKIPPED | year=%s | branch=%s | reason=workload cap", form.year, form.branch)
            continue
        busy = ConflictService(schedules).busy_commitments()
        result = engine.generate(generation_request_from_form(form, busy))
        repo.create(
            year=form.year,
            branch=form.branch,
            semester=form.semester,
            form_data=form.model_dump(mode="json"),
            entries=result.entries,
        )
        for shortfall in result.shortfalls:
            logger.warning(
                "SEED SHORTFALL | subject=%s | placed=%s | required=%s",
                shortfall.requirement.subject_name,
                shortfall.placed,
                shortfall.required,
            )
        created += 1
    return created


def main() -> None:
    configure_logging(get_settings().log_level)
    ensure_runtime_schema()
    db = SessionLocal()
    try:
        faculty = seed_faculty(FacultyRepository(db))
        subjects = seed_subjects(SubjectRepository(db))
        timetables = seed_timetables(TimetableRepository(db), TimetableEngine(rng=random.Random(SEED)))
    except AppError as exc:
        logger.error("SEED FAILED | reason=%s | details=%s", exc.message, exc.details)
        raise
    finally:
        db.close()
    logger.info("SEED COMPLETE | faculty=%s | subjects=%s | timetables=%s", faculty, subjects, timetables)


if __name__ == "__main__":
    main()
