from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from classgrid.services.scheduling.slot_grid import slots_covered_by

EntryKind = Literal["break", "lunch", "subject", "lab", "free"]
ENTRY_KINDS: tuple[str, ...] = ("break", "lunch", "subject", "lab", "free")
TEACHING_KINDS = frozenset({"subject", "lab"})


@dataclass(frozen=True)
class Requirement:
    """One subject/teacher demand to be scheduled."""

    subject_name: str
    teacher_ids: tuple[str, ...]
    is_lab: bool = False
    batch: str | None = None
    requirement_id: str | None = None


@dataclass(frozen=True)
class DayOptions:
    four_continuous_days: bool = False
    use_custom_days: bool = False
    selected_days: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScheduleEntry:
    day: str
    time_slot: str
    kind: EntryKind
    subject_name: str | None = None
    teacher_ids: tuple[str, ...] = ()
    batch: str | None = None
    free_type: str | None = None
    lab_group_id: str | None = None

    @property
    def is_lab(self) -> bool:
        return self.kind == "lab"

    @property
    def is_teaching(self) -> bool:
        return self.kind in TEACHING_KINDS

    def covered_slots(self) -> tuple[str, ...]:
        return slots_covered_by(self.time_slot)

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "time_slot": self.time_slot,
            "kind": self.kind,
            "subject_name": self.subject_name,
            "teacher_ids": list(self.teacher_ids),
            "batch": self.batch,
            "free_type": self.free_type,
            "lab_group_id": self.lab_group_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleEntry":
        return cls(
            day=data["day"],
            time_slot=data["time_slot"],
            kind=data["kind"],
            subject_name=data.get("subject_name"),
            teacher_ids=tuple(data.get("teacher_ids") or ()),
            batch=data.get("batch"),
            free_type=data.get("free_type"),
            lab_group_id=data.get("lab_group_id"),
        )


@dataclass(frozen=True)
class StoredSchedule:
    """A previously generated timetable as seen by the workload and conflict queries."""

    schedule_id: str
    entries: tuple[ScheduleEntry, ...]
    label: str = ""


@dataclass(frozen=True)
class GenerationRequest:
    year: str
    requirements: tuple[Requirement, ...]
    free_hour_categories: tuple[str, ...]
    day_options: DayOptions = field(default_factory=DayOptions)
    enable_batch_rotation: bool = True
    # (day, ordinary slot, teacher) triples already taken by other timetables.
    busy_commitments: frozenset[tuple[str, str, str]] = frozenset()


@dataclass(frozen=True)
class Shortfall:
    requirement: Requirement
    placed: int
    required: int

    @property
    def missing(self) -> int:
        return self.required - self.placed


@dataclass
class GenerationResult:
    days: list[str]
    entries: list[ScheduleEntry]
    shortfalls: list[Shortfall] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.shortfalls

    def entries_for(self, subject_name: str) -> list[ScheduleEntry]:
        return [entry for entry in self.entries if entry.subject_name == subject_name]
