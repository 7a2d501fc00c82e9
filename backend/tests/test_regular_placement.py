import random

from classgrid.services.scheduling.ledger import AllocationLedger
from classgrid.services.scheduling.models import Requirement
from classgrid.services.scheduling.regular import RegularSubjectPlacementStrategy
from classgrid.services.scheduling.slot_grid import DAYS, ORDINARY_SLOTS


def test_each_subject_gets_four_distinct_periods():
    ledger = AllocationLedger()
    requirement = Requirement("Compilers", ("Ravi",))

    entries, shortfalls = RegularSubjectPlacementStrategy(ledger, DAYS, random.Random(3)).place([requirement])

    assert shortfalls == []
    assert len(entries) == 4
    assert len({(entry.day, entry.time_slot) for entry in entries}) == 4
    assert all(entry.kind == "subject" for entry in entries)
    assert all(entry.time_slot in ORDINARY_SLOTS for entry in entries)


def test_same_teacher_is_never_double_booked():
    ledger = AllocationLedger()
    requirements = [Requirement("Compilers", ("Ravi",)), Requirement("Automata", ("Ravi",))]

    entries, _ = RegularSubjectPlacementStrategy(ledger, DAYS, random.Random(5)).place(requirements)

    cells = [(entry.day, entry.time_slot) for entry in entries]
    assert len(entries) == 8
    assert len(set(cells)) == len(cells)


def test_fully_booked_teacher_is_under_allocated_without_error():
    free_cells = {("Friday", "2:00-2:50"), ("Saturday", "9:30-10:20")}
    busy = {(day, slot, "Ravi") for day in DAYS for slot in ORDINARY_SLOTS} - {
        (day, slot, "Ravi") for day, slot in free_cells
    }
    requirement = Requirement("Compilers", ("Ravi",))

    entries, shortfalls = RegularSubjectPlacementStrategy(
        AllocationLedger(busy), DAYS, random.Random(1)
    ).place([requirement])

    assert {(entry.day, entry.time_slot) for entry in entries} == free_cells
    [shortfall] = shortfalls
    assert shortfall.placed == 2
    assert shortfall.required == 4
    assert shortfall.missing == 2


def test_co_teachers_must_both_be_free():
    busy = {(day, slot, "Priya") for day in DAYS[:5] for slot in ORDINARY_SLOTS}
    requirement = Requirement("Compilers", ("Ravi", "Priya"))

    entries, shortfalls = RegularSubjectPlacementStrategy(
        AllocationLedger(busy), DAYS, random.Random(9)
    ).place([requirement])

    assert shortfalls == []
    assert {entry.day for entry in entries} == {"Saturday"}
    assert all(entry.teacher_ids == ("Ravi", "Priya") for entry in entries)
