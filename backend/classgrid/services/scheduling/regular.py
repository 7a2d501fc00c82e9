from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from classgrid.services.scheduling.ledger import AllocationLedger
from classgrid.services.scheduling.models import Requirement, ScheduleEntry, Shortfall

logger = logging.getLogger(__name__)

DEFAULT_PERIODS_PER_WEEK = 4


class RegularSubjectPlacementStrategy:
    """Places each non-lab requirement into single periods, first come first served."""

    def __init__(
        self,
        ledger: AllocationLedger,
        days: Sequence[str],
        rng: random.Random,
        periods_per_week: int = DEFAULT_PERIODS_PER_WEEK,
    ) -> None:
        self.ledger = ledger
        self.days = list(days)
        self.random = rng
        self.periods_per_week = periods_per_week

    def place(self, requirements: Sequence[Requirement]) -> tuple[list[ScheduleEntry], list[Shortfall]]:
        entries: list[ScheduleEntry] = []
        shortfalls: list[Shortfall] = []
        for requirement in requirements:
            placed = self._place_requirement(requirement)
            entries.extend(placed)
            if len(placed) < self.periods_per_week:
                logger.warning(
                    "SUBJECT UNDER-ALLOCATED | subject=%s | teachers=%s | placed=%s | required=%s",
                    requirement.subject_name,
                    ",".join(requirement.teacher_ids),
                    len(placed),
                    self.periods_per_week,
                )
                shortfalls.append(
                    Shortfall(requirement=requirement, placed=len(placed), required=self.periods_per_week)
                )
        return entries, shortfalls

    def _place_requirement(self, requirement: Requirement) -> list[ScheduleEntry]:
        placed: list[ScheduleEntry] = []
        for _ in range(self.periods_per_week):
            candidates = self.ledger.free_cells(self.days, requirement.teacher_ids)
            if not candidates:
                break
            day, slot = self.random.choice(candidates)
            self.ledger.commit(day, slot, requirement.teacher_ids)
            placed.append(
                ScheduleEntry(
                    day=day,
                    time_slot=slot,
                    kind="subject",
                    subject_name=requirement.subject_name,
                    teacher_ids=requirement.teacher_ids,
                )
            )
        return placed
