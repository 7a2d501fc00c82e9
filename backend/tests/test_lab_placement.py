import itertools
import random

from classgrid.services.scheduling.labs import LabPlacementStrategy, pair_rotation_batches
from classgrid.services.scheduling.ledger import AllocationLedger
from classgrid.services.scheduling.models import Requirement
from classgrid.services.scheduling.slot_grid import AFTERNOON_BLOCK, DAYS, MORNING_BLOCK


def _group_ids():
    counter = itertools.count(1)
    return lambda: f"group-{next(counter)}"


def _strategy(ledger=None, days=DAYS, seed=11):
    return LabPlacementStrategy(
        ledger or AllocationLedger(),
        days,
        random.Random(seed),
        group_id_factory=_group_ids(),
    )


def test_single_lab_prefers_morning_block():
    lab = Requirement("Physics Lab", ("Anil",), is_lab=True)
    outcome = _strategy().place([lab])

    assert outcome.placed == [lab]
    assert not outcome.dropped
    [entry] = outcome.entries
    assert entry.time_slot == MORNING_BLOCK.label
    assert entry.kind == "lab"
    assert entry.lab_group_id == "group-1"


def test_lab_falls_back_to_afternoon_when_mornings_are_taken():
    busy = {(day, slot, "Anil") for day in DAYS for slot in MORNING_BLOCK.slots}
    lab = Requirement("Physics Lab", ("Anil",), is_lab=True)

    outcome = _strategy(AllocationLedger(busy)).place([lab])

    [entry] = outcome.entries
    assert entry.time_slot == AFTERNOON_BLOCK.label
    assert entry.day in DAYS


def test_lab_is_dropped_when_no_block_fits():
    busy = {(day, slot, "Anil") for day in DAYS for slot in MORNING_BLOCK.slots + AFTERNOON_BLOCK.slots[:1]}
    lab = Requirement("Physics Lab", ("Anil",), is_lab=True)

    outcome = _strategy(AllocationLedger(busy)).place([lab])

    assert outcome.entries == []
    assert outcome.dropped == [lab]


def test_pair_rotation_batches_zips_in_order():
    first = Requirement("Networks Lab", ("Anil",), is_lab=True, batch="B1")
    second = Requirement("OS Lab", ("Meena",), is_lab=True, batch="B2")
    extra = Requirement("Graphics Lab", ("Kiran",), is_lab=True, batch="B1")
    plain = Requirement("Physics Lab", ("Ravi",), is_lab=True)

    pairs, leftovers = pair_rotation_batches([first, plain, second, extra])

    assert pairs == [(first, second)]
    assert leftovers == [plain, extra]


def test_rotation_swaps_batches_across_two_days():
    first = Requirement("Networks Lab", ("Anil",), is_lab=True, batch="B1")
    second = Requirement("OS Lab", ("Meena",), is_lab=True, batch="B2")

    outcome = _strategy().place([first, second], rotation=True)

    assert len(outcome.entries) == 4
    days = sorted({entry.day for entry in outcome.entries}, key=DAYS.index)
    assert len(days) == 2
    assert {entry.time_slot for entry in outcome.entries} == {MORNING_BLOCK.label}

    day_a = {entry.subject_name: entry for entry in outcome.entries if entry.day == days[0]}
    day_b = {entry.subject_name: entry for entry in outcome.entries if entry.day == days[1]}
    assert day_a["Networks Lab"].batch == "B1"
    assert day_a["OS Lab"].batch == "B2"
    assert day_b["Networks Lab"].batch == "B2"
    assert day_b["OS Lab"].batch == "B1"

    assert day_a["Networks Lab"].lab_group_id == day_a["OS Lab"].lab_group_id
    assert day_b["Networks Lab"].lab_group_id == day_b["OS Lab"].lab_group_id
    assert day_a["Networks Lab"].lab_group_id != day_b["Networks Lab"].lab_group_id


def test_rotation_disabled_places_labs_independently():
    first = Requirement("Networks Lab", ("Anil",), is_lab=True, batch="B1")
    second = Requirement("OS Lab", ("Meena",), is_lab=True, batch="B2")

    outcome = _strategy().place([first, second], rotation=False)

    assert len(outcome.entries) == 2
    assert [entry.batch for entry in outcome.entries] == ["B1", "B2"]
    assert outcome.entries[0].lab_group_id != outcome.entries[1].lab_group_id
    assert outcome.entries[0].day != outcome.entries[1].day


def test_rotation_pair_sharing_a_teacher_is_placed_independently():
    first = Requirement("Networks Lab", ("Anil",), is_lab=True, batch="B1")
    second = Requirement("OS Lab", ("Anil",), is_lab=True, batch="B2")

    outcome = _strategy().place([first, second], rotation=True)

    assert len(outcome.entries) == 2
    assert outcome.entries[0].day != outcome.entries[1].day


def test_rotation_needs_two_free_days():
    first = Requirement("Networks Lab", ("Anil",), is_lab=True, batch="B1")
    second = Requirement("OS Lab", ("Meena",), is_lab=True, batch="B2")

    outcome = _strategy(days=["Monday"]).place([first, second], rotation=True)

    assert outcome.entries == []
    assert outcome.dropped == [first, second]
