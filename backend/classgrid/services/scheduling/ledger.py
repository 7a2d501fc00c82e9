from __future__ import annotations

from collections.abc import Iterable, Sequence

from classgrid.services.scheduling.slot_grid import ORDINARY_SLOTS, LabBlock


class AllocationLedger:
    """Occupied cells and teacher commitments for a single generation run.

    A ledger belongs to exactly one run and is discarded with it. It may be
    seeded with (day, slot, teacher) commitments held by other timetables so
    that a teacher is never double-booked across classes.
    """

    def __init__(self, busy_commitments: Iterable[tuple[str, str, str]] = ()) -> None:
        self._occupied: set[tuple[str, str]] = set()
        self._teacher_slots: set[tuple[str, str, str]] = set(busy_commitments)

    def is_cell_free(self, day: str, slot: str) -> bool:
        return (day, slot) not in self._occupied

    def is_teacher_free(self, day: str, slot: str, teacher_id: str) -> bool:
        return (day, slot, teacher_id) not in self._teacher_slots

    def can_place(self, day: str, slot: str, teacher_ids: Sequence[str]) -> bool:
        if not self.is_cell_free(day, slot):
            return False
        return all(self.is_teacher_free(day, slot, teacher_id) for teacher_id in teacher_ids)

    def is_block_free(self, day: str, block: LabBlock, teacher_ids: Sequence[str]) -> bool:
        return all(self.can_place(day, slot, teacher_ids) for slot in block.slots)

    def commit(self, day: str, slot: str, teacher_ids: Sequence[str]) -> None:
        self._occupied.add((day, slot))
        for teacher_id in teacher_ids:
            self._teacher_slots.add((day, slot, teacher_id))

    def commit_block(self, day: str, block: LabBlock, teacher_ids: Sequence[str]) -> None:
        for slot in block.slots:
            self.commit(day, slot, teacher_ids)

    def reserve_teacher(self, day: str, slot: str, teacher_id: str) -> None:
        self._teacher_slots.add((day, slot, teacher_id))

    def free_cells(self, days: Sequence[str], teacher_ids: Sequence[str] = ()) -> list[tuple[str, str]]:
        return [
            (day, slot)
            for day in days
            for slot in ORDINARY_SLOTS
            if self.can_place(day, slot, teacher_ids)
        ]

    @property
    def occupied_count(self) -> int:
        return len(self._occupied)
