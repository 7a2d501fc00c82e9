from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, Protocol, TypeVar
import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from classgrid.db.base import Base
from classgrid.models.faculty import Faculty
from classgrid.models.subject import Subject
from classgrid.models.timetable import Timetable
from classgrid.services.scheduling.models import ScheduleEntry, StoredSchedule

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Protocol[ModelT]):
    def list(self) -> list[ModelT]: ...

    def get(self, item_id: str) -> ModelT | None: ...

    def save(self, item: ModelT) -> ModelT: ...

    def delete(self, item: ModelT) -> None: ...


class SqlAlchemyRepository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, db: Session) -> None:
        self.db = db

    def list(self) -> list[ModelT]:
        return list(self.db.execute(select(self.model)).scalars())

    def get(self, item_id: str) -> ModelT | None:
        return self.db.get(self.model, item_id)

    def save(self, item: ModelT) -> ModelT:
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def delete(self, item: ModelT) -> None:
        self.db.delete(item)
        self.db.commit()


class FacultyRepository(SqlAlchemyRepository[Faculty]):
    model = Faculty

    def list(self) -> list[Faculty]:
        return list(self.db.execute(select(Faculty).order_by(Faculty.name)).scalars())

    def get_by_name(self, name: str, exclude_id: str | None = None) -> Faculty | None:
        query = select(Faculty).where(func.lower(Faculty.name) == name.strip().lower())
        if exclude_id is not None:
            query = query.where(Faculty.id != exclude_id)
        return self.db.execute(query).scalars().first()


class SubjectRepository(SqlAlchemyRepository[Subject]):
    model = Subject

    def filter(self, year: str | None = None, branch: str | None = None) -> list[Subject]:
        query = select(Subject).order_by(Subject.year, Subject.name)
        if year is not None:
            query = query.where(Subject.year == year)
        if branch is not None:
            query = query.where(Subject.branch == branch)
        return list(self.db.execute(query).scalars())

    def find_duplicate(self, name: str, year: str, branch: str, exclude_id: str | None = None) -> Subject | None:
        query = select(Subject).where(
            func.lower(Subject.name) == name.strip().lower(),
            Subject.year == year,
            Subject.branch == branch,
        )
        if exclude_id is not None:
            query = query.where(Subject.id != exclude_id)
        return self.db.execute(query).scalars().first()


class TimetableRepository(SqlAlchemyRepository[Timetable]):
    model = Timetable

    def filter(
        self,
        year: str | None = None,
        branch: str | None = None,
        semester: str | None = None,
    ) -> list[Timetable]:
        query = select(Timetable).order_by(Timetable.created_at)
        if year is not None:
            query = query.where(Timetable.year == year)
        if branch is not None:
            query = query.where(Timetable.branch == branch)
        if semester is not None:
            query = query.where(Timetable.semester == semester)
        return list(self.db.execute(query).scalars())

    def find_duplicate(
        self,
        year: str,
        branch: str,
        semester: str,
        exclude_id: str | None = None,
    ) -> Timetable | None:
        query = select(Timetable).where(
            Timetable.year == year,
            Timetable.branch == branch,
            Timetable.semester == semester,
        )
        if exclude_id is not None:
            query = query.where(Timetable.id != exclude_id)
        return self.db.execute(query).scalars().first()

    def create(
        self,
        *,
        year: str,
        branch: str,
        semester: str,
        form_data: dict,
        entries: list[ScheduleEntry],
    ) -> Timetable:
        timetable = Timetable(
            id=str(uuid.uuid4()),
            year=year,
            branch=branch,
            semester=semester,
            form_data=form_data,
            entries=[entry.to_dict() for entry in entries],
            created_at=datetime.now(timezone.utc),
        )
        return self.save(timetable)

    def replace_entries(self, timetable: Timetable, entries: list[ScheduleEntry]) -> Timetable:
        # Reassign the list so the JSON column is flagged dirty.
        timetable.entries = [entry.to_dict() for entry in entries]
        return self.save(timetable)

    def for_teacher(self, teacher_id: str) -> list[Timetable]:
        return [
            item
            for item in self.filter()
            if any(teacher_id in (entry.get("teacher_ids") or []) for entry in item.entries)
        ]

    def stored_schedules(self) -> list[StoredSchedule]:
        return [to_stored_schedule(item) for item in self.filter()]


def to_stored_schedule(timetable: Timetable) -> StoredSchedule:
    return StoredSchedule(
        schedule_id=timetable.id,
        entries=tuple(ScheduleEntry.from_dict(item) for item in timetable.entries),
        label=f"{timetable.year} {timetable.branch} {timetable.semester}",
    )
