from __future__ import annotations

import logging
import random
from collections.abc import Callable

from classgrid.services.scheduling.gap_filler import fill_free_hours, reserved_entries
from classgrid.services.scheduling.labs import LabPlacementStrategy
from classgrid.services.scheduling.ledger import AllocationLedger
from classgrid.services.scheduling.models import GenerationRequest, GenerationResult, Shortfall
from classgrid.services.scheduling.regular import DEFAULT_PERIODS_PER_WEEK, RegularSubjectPlacementStrategy
from classgrid.services.scheduling.slot_grid import active_days, slot_sort_key
from classgrid.services.scheduling.validation import validate_request

logger = logging.getLogger(__name__)


class TimetableEngine:
    """Builds one weekly timetable: labs, then regular subjects, then free hours.

    Placement is best effort. Requirements that cannot be placed are reported
    as shortfalls on the result and never raise.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        periods_per_week: int = DEFAULT_PERIODS_PER_WEEK,
        group_id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.random = rng or random.Random()
        self.periods_per_week = periods_per_week
        self.group_id_factory = group_id_factory

    def generate(self, request: GenerationRequest) -> GenerationResult:
        validate_request(request)
        days = active_days(request.year, request.day_options)
        ledger = AllocationLedger(request.busy_commitments)
        entries = reserved_entries(days)
        shortfalls: list[Shortfall] = []

        labs = [item for item in request.requirements if item.is_lab]
        regular = [item for item in request.requirements if not item.is_lab]

        lab_outcome = LabPlacementStrategy(
            ledger,
            days,
            self.random,
            group_id_factory=self.group_id_factory,
        ).place(labs, rotation=request.enable_batch_rotation)
        entries.extend(lab_outcome.entries)
        shortfalls.extend(Shortfall(requirement=lab, placed=0, required=1) for lab in lab_outcome.dropped)

        regular_entries, regular_shortfalls = RegularSubjectPlacementStrategy(
            ledger,
            days,
            self.random,
            periods_per_week=self.periods_per_week,
        ).place(regular)
        entries.extend(regular_entries)
        shortfalls.extend(regular_shortfalls)

        categories = [category.strip() for category in request.free_hour_categories if category and category.strip()]
        entries.extend(fill_free_hours(ledger, days, categories, self.random))

        entries.sort(key=lambda entry: slot_sort_key(entry.day, entry.time_slot))
        logger.info(
            "TIMETABLE ENGINE RUN | year=%s | days=%s | labs=%s | subjects=%s | entries=%s | shortfalls=%s",
            request.year,
            len(days),
            len(labs),
            len(regular),
            len(entries),
            len(shortfalls),
        )
        return GenerationResult(days=days, entries=entries, shortfalls=shortfalls)
