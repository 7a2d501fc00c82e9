from collections.abc import Generator
import random

from fastapi import Depends
from sqlalchemy.orm import Session

from classgrid.core.config import Settings, get_settings
from classgrid.db.session import SessionLocal
from classgrid.services.repository import FacultyRepository, SubjectRepository, TimetableRepository
from classgrid.services.scheduling.engine import TimetableEngine


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_faculty_repository(db: Session = Depends(get_db)) -> FacultyRepository:
    return FacultyRepository(db)


def get_subject_repository(db: Session = Depends(get_db)) -> SubjectRepository:
    return SubjectRepository(db)


def get_timetable_repository(db: Session = Depends(get_db)) -> TimetableRepository:
    return TimetableRepository(db)


def get_timetable_engine(settings: Settings = Depends(get_settings)) -> TimetableEngine:
    # A fresh engine per request keeps runs from sharing state.
    return TimetableEngine(
        rng=random.Random(settings.generation_random_seed),
        periods_per_week=settings.regular_periods_per_week,
    )
