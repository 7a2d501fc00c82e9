from classgrid.services.scheduling.models import DayOptions
from classgrid.services.scheduling.slot_grid import (
    AFTERNOON_BLOCK,
    BREAK_SLOT,
    DAYS,
    GRID_ORDER,
    LUNCH_SLOT,
    MORNING_BLOCK,
    ORDINARY_SLOTS,
    active_days,
    is_reserved_slot,
    slot_sort_key,
    slots_covered_by,
)


def test_lab_blocks_partition_the_ordinary_slots():
    assert MORNING_BLOCK.slots + AFTERNOON_BLOCK.slots == ORDINARY_SLOTS
    assert len(MORNING_BLOCK.slots) == 4
    assert len(AFTERNOON_BLOCK.slots) == 3


def test_grid_order_contains_reserved_slots_between_periods():
    assert len(GRID_ORDER) == 9
    assert GRID_ORDER.index(BREAK_SLOT) == 2
    assert GRID_ORDER.index(LUNCH_SLOT) == 5
    assert is_reserved_slot(BREAK_SLOT)
    assert not is_reserved_slot("9:30-10:20")


def test_slots_covered_by_expands_lab_labels_only():
    assert slots_covered_by("9:30-1:00") == MORNING_BLOCK.slots
    assert slots_covered_by("2:00-4:30") == AFTERNOON_BLOCK.slots
    assert slots_covered_by("12:10-1:00") == ("12:10-1:00",)


def test_non_senior_years_always_run_six_days():
    options = DayOptions(four_continuous_days=True, use_custom_days=True, selected_days=("Monday",))
    assert active_days("3rd Year", options) == list(DAYS)


def test_senior_year_day_selection():
    assert active_days("4th Year", None) == list(DAYS)
    assert active_days("4th Year", DayOptions(four_continuous_days=True)) == [
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
    ]


def test_custom_days_win_and_come_back_in_canonical_order():
    options = DayOptions(
        four_continuous_days=True,
        use_custom_days=True,
        selected_days=("Friday", "Monday", "Friday"),
    )
    assert active_days("4th Year", options) == ["Monday", "Friday"]


def test_slot_sort_key_orders_by_day_then_grid_position():
    keys = [
        slot_sort_key("Tuesday", "9:30-10:20"),
        slot_sort_key("Monday", LUNCH_SLOT),
        slot_sort_key("Monday", "2:00-4:30"),
        slot_sort_key("Monday", "9:30-1:00"),
    ]
    assert sorted(keys) == [keys[3], keys[1], keys[2], keys[0]]
