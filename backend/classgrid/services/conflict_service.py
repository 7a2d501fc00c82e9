from collections import defaultdict
from typing import Dict, List, Sequence, Set, Tuple

from classgrid.schemas.conflict import ConflictDetail, ConflictReport
from classgrid.services.scheduling.models import ScheduleEntry, StoredSchedule

Commitment = Tuple[str, str, str]


class ConflictService:
    def __init__(self, schedules: Sequence[StoredSchedule]):
        self.schedules = list(schedules)

    def _bookings(self, exclude_id: str | None = None) -> Dict[Commitment, List[Tuple[str, ScheduleEntry]]]:
        bookings: Dict[Commitment, List[Tuple[str, ScheduleEntry]]] = defaultdict(list)
        for schedule in self.schedules:
            if exclude_id is not None and schedule.schedule_id == exclude_id:
                continue
            for entry in schedule.entries:
                if not entry.is_teaching:
                    continue
                # A lab block books its teachers for every slot it covers
                for slot in entry.covered_slots():
                    for teacher_id in entry.teacher_ids:
                        bookings[(entry.day, slot, teacher_id)].append((schedule.schedule_id, entry))
        return bookings

    def busy_commitments(self, exclude_id: str | None = None) -> frozenset:
        return frozenset(self._bookings(exclude_id))

    def is_teacher_available(self, teacher_id: str, day: str, time_slot: str, exclude_id: str | None = None) -> bool:
        return (day, time_slot, teacher_id) not in self._bookings(exclude_id)

    def detect_conflicts(self) -> ConflictReport:
        conflicts: List[ConflictDetail] = []
        labels = {schedule.schedule_id: schedule.label or schedule.schedule_id for schedule in self.schedules}

        for (day, time_slot, teacher_id), booked in sorted(self._bookings().items()):
            if len(booked) < 2:
                continue
            timetable_ids: List[str] = []
            seen: Set[str] = set()
            for schedule_id, _ in booked:
                if schedule_id not in seen:
                    seen.add(schedule_id)
                    timetable_ids.append(schedule_id)
            subjects = ", ".join(sorted({entry.subject_name or "" for _, entry in booked}))
            conflicts.append(ConflictDetail(
                id=f"fac-{teacher_id}-{day}-{time_slot}",
                conflict_type="faculty_conflict",
                description=(
                    f"Faculty overlap for {teacher_id} on {day} {time_slot}: {subjects} "
                    f"({'; '.join(labels[item] for item in timetable_ids)})"
                ),
                severity="hard",
                teacher=teacher_id,
                day=day,
                time_slot=time_slot,
                affected_timetables=timetable_ids,
            ))

        return ConflictReport(conflicts=conflicts)
