from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from classgrid.services.scheduling.ledger import AllocationLedger
from classgrid.services.scheduling.models import Requirement, ScheduleEntry
from classgrid.services.scheduling.slot_grid import DAYS, LAB_BLOCKS, LabBlock

logger = logging.getLogger(__name__)

FIRST_BATCH = "B1"
SECOND_BATCH = "B2"


def _new_lab_group_id() -> str:
    return str(uuid.uuid4())


@dataclass
class LabPlacementOutcome:
    entries: list[ScheduleEntry] = field(default_factory=list)
    placed: list[Requirement] = field(default_factory=list)
    dropped: list[Requirement] = field(default_factory=list)


def pair_rotation_batches(
    labs: Sequence[Requirement],
) -> tuple[list[tuple[Requirement, Requirement]], list[Requirement]]:
    """Pair the i-th B1 lab with the i-th B2 lab.

    Returns the pairs and the labs left over for independent placement, the
    latter in input order.
    """
    first = [(index, lab) for index, lab in enumerate(labs) if lab.batch == FIRST_BATCH]
    second = [(index, lab) for index, lab in enumerate(labs) if lab.batch == SECOND_BATCH]
    if not first or not second:
        return [], list(labs)

    pairs: list[tuple[Requirement, Requirement]] = []
    paired_indices: set[int] = set()
    for (first_index, first_lab), (second_index, second_lab) in zip(first, second):
        pairs.append((first_lab, second_lab))
        paired_indices.update((first_index, second_index))
    leftovers = [lab for index, lab in enumerate(labs) if index not in paired_indices]
    return pairs, leftovers


class LabPlacementStrategy:
    """Places lab requirements into whole morning or afternoon blocks."""

    def __init__(
        self,
        ledger: AllocationLedger,
        days: Sequence[str],
        rng: random.Random,
        group_id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.ledger = ledger
        self.days = list(days)
        self.random = rng
        self._new_group_id = group_id_factory or _new_lab_group_id

    def place(self, labs: Sequence[Requirement], *, rotation: bool = False) -> LabPlacementOutcome:
        outcome = LabPlacementOutcome()
        independent: list[Requirement] = list(labs)

        if rotation:
            pairs, independent = pair_rotation_batches(labs)
            for first, second in pairs:
                if set(first.teacher_ids) & set(second.teacher_ids):
                    # Parallel batches cannot share a teacher.
                    logger.info(
                        "Rotation pair %s/%s shares a teacher; placing independently",
                        first.subject_name,
                        second.subject_name,
                    )
                    independent.extend((first, second))
                    continue
                entries = self._place_rotation_pair(first, second)
                if entries is None:
                    logger.warning(
                        "LAB ROTATION SKIPPED | first=%s | second=%s | reason=fewer than two free days",
                        first.subject_name,
                        second.subject_name,
                    )
                    outcome.dropped.extend((first, second))
                    continue
                outcome.entries.extend(entries)
                outcome.placed.extend((first, second))

        for lab in independent:
            entry = self._place_single(lab)
            if entry is None:
                logger.warning(
                    "LAB DROPPED | subject=%s | teachers=%s | reason=no free block",
                    lab.subject_name,
                    ",".join(lab.teacher_ids),
                )
                outcome.dropped.append(lab)
                continue
            outcome.entries.append(entry)
            outcome.placed.append(lab)
        return outcome

    def _valid_days(self, block: LabBlock, teacher_ids: Sequence[str]) -> list[str]:
        return [day for day in self.days if self.ledger.is_block_free(day, block, teacher_ids)]

    def _place_single(self, lab: Requirement) -> ScheduleEntry | None:
        for block in LAB_BLOCKS:
            candidates = self._valid_days(block, lab.teacher_ids)
            if not candidates:
                continue
            day = self.random.choice(candidates)
            self.ledger.commit_block(day, block, lab.teacher_ids)
            return self._lab_entry(day, block, lab, lab.batch, self._new_group_id())
        return None

    def _place_rotation_pair(self, first: Requirement, second: Requirement) -> list[ScheduleEntry] | None:
        teacher_ids = first.teacher_ids + second.teacher_ids
        for block in LAB_BLOCKS:
            candidates = self._valid_days(block, teacher_ids)
            if len(candidates) < 2:
                continue
            day_a, day_b = sorted(self.random.sample(candidates, 2), key=DAYS.index)
            entries: list[ScheduleEntry] = []
            for day, first_label, second_label in (
                (day_a, first.batch, second.batch),
                (day_b, second.batch, first.batch),
            ):
                group_id = self._new_group_id()
                self.ledger.commit_block(day, block, teacher_ids)
                entries.append(self._lab_entry(day, block, first, first_label, group_id))
                entries.append(self._lab_entry(day, block, second, second_label, group_id))
            return entries
        return None

    @staticmethod
    def _lab_entry(
        day: str,
        block: LabBlock,
        lab: Requirement,
        batch: str | None,
        group_id: str,
    ) -> ScheduleEntry:
        return ScheduleEntry(
            day=day,
            time_slot=block.label,
            kind="lab",
            subject_name=lab.subject_name,
            teacher_ids=lab.teacher_ids,
            batch=batch,
            lab_group_id=group_id,
        )
