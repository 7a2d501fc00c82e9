from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from classgrid.services.scheduling.models import Requirement, StoredSchedule

MAX_NON_LAB_SUBJECTS = 3


@dataclass(frozen=True)
class WorkloadViolation:
    teacher: str
    existing: int
    requested: int
    cap: int

    @property
    def total(self) -> int:
        return self.existing + self.requested

    def to_dict(self) -> dict:
        return {
            "teacher": self.teacher,
            "existing": self.existing,
            "requested": self.requested,
            "total": self.total,
            "cap": self.cap,
        }


@dataclass(frozen=True)
class FacultyWorkload:
    name: str
    assigned_subjects: int
    max_subjects: int

    @property
    def remaining_capacity(self) -> int:
        return max(0, self.max_subjects - self.assigned_subjects)

    @property
    def is_available(self) -> bool:
        return self.assigned_subjects < self.max_subjects


class WorkloadValidator:
    """Counts distinct non-lab subjects per teacher over stored schedules.

    The corpus is indexed once on construction and never mutated, so repeated
    queries return the same answer until a new validator is built over a new
    corpus.
    """

    def __init__(self, schedules: Iterable[StoredSchedule], cap: int = MAX_NON_LAB_SUBJECTS) -> None:
        self.cap = cap
        self._assignments: dict[str, set[tuple[str, str]]] = defaultdict(set)
        for schedule in schedules:
            for entry in schedule.entries:
                if entry.kind != "subject" or not entry.subject_name:
                    continue
                for teacher_id in entry.teacher_ids:
                    self._assignments[teacher_id].add((schedule.schedule_id, entry.subject_name))

    def count_non_lab_assignments(self, teacher_id: str) -> int:
        return len(self._assignments.get(teacher_id, ()))

    def is_available(self, teacher_id: str, cap: int | None = None) -> bool:
        limit = self.cap if cap is None else cap
        return self.count_non_lab_assignments(teacher_id) < limit

    def check_requirements(
        self,
        requirements: Iterable[Requirement],
        cap: int | None = None,
    ) -> list[WorkloadViolation]:
        limit = self.cap if cap is None else cap
        requested: dict[str, set[str]] = defaultdict(set)
        for requirement in requirements:
            if requirement.is_lab:
                continue
            for teacher_id in requirement.teacher_ids:
                requested[teacher_id].add(requirement.subject_name)

        violations: list[WorkloadViolation] = []
        for teacher_id in sorted(requested):
            existing = self.count_non_lab_assignments(teacher_id)
            if existing + len(requested[teacher_id]) > limit:
                violations.append(
                    WorkloadViolation(
                        teacher=teacher_id,
                        existing=existing,
                        requested=len(requested[teacher_id]),
                        cap=limit,
                    )
                )
        return violations

    def summary(self, teacher_id: str) -> FacultyWorkload:
        return FacultyWorkload(
            name=teacher_id,
            assigned_subjects=self.count_non_lab_assignments(teacher_id),
            max_subjects=self.cap,
        )
