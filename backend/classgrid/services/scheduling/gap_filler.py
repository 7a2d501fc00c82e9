from __future__ import annotations

import random
from collections.abc import Sequence

from classgrid.services.scheduling.ledger import AllocationLedger
from classgrid.services.scheduling.models import ScheduleEntry
from classgrid.services.scheduling.slot_grid import BREAK_SLOT, LUNCH_SLOT


def reserved_entries(days: Sequence[str]) -> list[ScheduleEntry]:
    entries: list[ScheduleEntry] = []
    for day in days:
        entries.append(ScheduleEntry(day=day, time_slot=BREAK_SLOT, kind="break"))
        entries.append(ScheduleEntry(day=day, time_slot=LUNCH_SLOT, kind="lunch"))
    return entries


def fill_free_hours(
    ledger: AllocationLedger,
    days: Sequence[str],
    categories: Sequence[str],
    rng: random.Random,
) -> list[ScheduleEntry]:
    """Give every still-empty cell a free-hour category picked at random."""
    if not categories:
        raise ValueError("At least one free hour category is required")
    entries: list[ScheduleEntry] = []
    for day, slot in ledger.free_cells(days):
        ledger.commit(day, slot, ())
        entries.append(ScheduleEntry(day=day, time_slot=slot, kind="free", free_type=rng.choice(categories)))
    return entries
