"""Canonical day/slot grid and the two fixed lab block shapes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

DAYS: tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
FOUR_DAY_RUN: tuple[str, ...] = DAYS[:4]
SENIOR_YEAR = "4th Year"

ORDINARY_SLOTS: tuple[str, ...] = (
    "9:30-10:20",
    "10:20-11:10",
    "11:20-12:10",
    "12:10-1:00",
    "2:00-2:50",
    "2:50-3:40",
    "3:40-4:30",
)
BREAK_SLOT = "11:10-11:20"
LUNCH_SLOT = "1:00-2:00"

# Display order of a day's row, reserved slots included.
GRID_ORDER: tuple[str, ...] = (
    "9:30-10:20",
    "10:20-11:10",
    BREAK_SLOT,
    "11:20-12:10",
    "12:10-1:00",
    LUNCH_SLOT,
    "2:00-2:50",
    "2:50-3:40",
    "3:40-4:30",
)


@dataclass(frozen=True)
class LabBlock:
    name: str
    label: str
    slots: tuple[str, ...]


MORNING_BLOCK = LabBlock(name="morning", label="9:30-1:00", slots=ORDINARY_SLOTS[:4])
AFTERNOON_BLOCK = LabBlock(name="afternoon", label="2:00-4:30", slots=ORDINARY_SLOTS[4:])
# Morning first: it is the preferred shape on every lab path.
LAB_BLOCKS: tuple[LabBlock, ...] = (MORNING_BLOCK, AFTERNOON_BLOCK)

_BLOCKS_BY_LABEL = {block.label: block for block in LAB_BLOCKS}


class DaySelection(Protocol):
    four_continuous_days: bool
    use_custom_days: bool
    selected_days: tuple[str, ...]


def lab_block_for_label(label: str) -> LabBlock | None:
    return _BLOCKS_BY_LABEL.get(label)


def slots_covered_by(time_slot: str) -> tuple[str, ...]:
    block = lab_block_for_label(time_slot)
    if block is not None:
        return block.slots
    return (time_slot,)


def is_ordinary_slot(time_slot: str) -> bool:
    return time_slot in ORDINARY_SLOTS


def is_reserved_slot(time_slot: str) -> bool:
    return time_slot in (BREAK_SLOT, LUNCH_SLOT)


def active_days(year: str, day_options: DaySelection | None) -> list[str]:
    """Return the ordered working days for a timetable.

    Only the senior year may run on fewer than six days. A custom selection
    wins over the four-day run when both flags are set; custom days come back
    in canonical order with duplicates removed.
    """
    if year != SENIOR_YEAR or day_options is None:
        return list(DAYS)
    if day_options.use_custom_days:
        selected = set(day_options.selected_days)
        return [day for day in DAYS if day in selected]
    if day_options.four_continuous_days:
        return list(FOUR_DAY_RUN)
    return list(DAYS)


def slot_sort_key(day: str, time_slot: str) -> tuple[int, int]:
    day_index = DAYS.index(day) if day in DAYS else len(DAYS)
    first_slot = slots_covered_by(time_slot)[0]
    slot_index = GRID_ORDER.index(first_slot) if first_slot in GRID_ORDER else len(GRID_ORDER)
    return day_index, slot_index
