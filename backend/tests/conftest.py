import os
import random

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classgrid.api.deps import get_db, get_timetable_engine
from classgrid.db.base import Base
from classgrid.main import app
from classgrid.services.scheduling.engine import TimetableEngine


@pytest.fixture()
def client():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    # Seeded so generated grids are reproducible across runs.
    def override_get_timetable_engine():
        return TimetableEngine(rng=random.Random(2024))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_timetable_engine] = override_get_timetable_engine

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def form_payload():
    def build(**overrides):
        payload = {
            "year": "2nd Year",
            "semester": "I",
            "branch": "CSE",
            "course_name": "B.Tech Computer Science",
            "room_number": "A-204",
            "academic_year": "2025-26",
            "class_incharge_name": "Lakshmi Devi",
            "mobile_number": "9876543210",
            "wef_date": "2025-07-01",
            "subject_teacher_pairs": [
                {"subject_name": "Data Structures", "teacher_ids": ["Ravi Kumar"]},
                {"subject_name": "Discrete Mathematics", "teacher_ids": ["Priya Sharma"]},
                {"subject_name": "Digital Logic", "teacher_ids": ["Suresh Babu"]},
                {"subject_name": "Data Structures Lab", "teacher_ids": ["Ravi Kumar"], "is_lab": True},
            ],
            "free_hours": [{"type": "Library"}, {"type": "Sports"}],
        }
        payload.update(overrides)
        return payload

    return build
