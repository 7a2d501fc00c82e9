import itertools
import random
from collections import Counter

import pytest

from classgrid.core.exceptions import RequirementValidationError
from classgrid.services.scheduling import (
    DayOptions,
    GenerationRequest,
    Requirement,
    TimetableEngine,
)
from classgrid.services.scheduling.slot_grid import BREAK_SLOT, DAYS, GRID_ORDER, LUNCH_SLOT, ORDINARY_SLOTS


def _engine(seed=42):
    counter = itertools.count(1)
    return TimetableEngine(rng=random.Random(seed), group_id_factory=lambda: f"group-{next(counter)}")


def _request(**overrides):
    values = {
        "year": "3rd Year",
        "requirements": (
            Requirement("Operating Systems", ("Ravi",)),
            Requirement("Computer Networks", ("Priya",)),
            Requirement("Software Engineering", ("Suresh", "Meena")),
            Requirement("Networks Lab", ("Priya",), is_lab=True, batch="B1"),
            Requirement("OS Lab", ("Ravi",), is_lab=True, batch="B2"),
        ),
        "free_hour_categories": ("Library", "Sports"),
    }
    values.update(overrides)
    return GenerationRequest(**values)


def _covered_cells(entries):
    cells = []
    for entry in entries:
        for slot in entry.covered_slots():
            cells.append((entry.day, slot))
    return cells


def test_every_cell_is_covered_exactly_once():
    result = _engine().generate(_request())

    assert result.days == list(DAYS)
    counts = Counter(_covered_cells(entry for entry in result.entries if entry.kind != "lab"))
    lab_groups = {}
    for entry in result.entries:
        if entry.kind == "lab":
            lab_groups.setdefault(entry.lab_group_id, entry)
    counts.update(_covered_cells(lab_groups.values()))

    expected = {(day, slot) for day in DAYS for slot in GRID_ORDER}
    assert set(counts) == expected
    assert all(value == 1 for value in counts.values())


def test_reserved_slots_are_break_and_lunch():
    result = _engine().generate(_request())

    for day in DAYS:
        cells = {entry.time_slot: entry.kind for entry in result.entries if entry.day == day}
        assert cells[BREAK_SLOT] == "break"
        assert cells[LUNCH_SLOT] == "lunch"


def test_no_teacher_teaches_twice_in_one_slot():
    result = _engine().generate(_request())

    seen = Counter()
    for entry in result.entries:
        if not entry.is_teaching:
            continue
        for slot in entry.covered_slots():
            for teacher in entry.teacher_ids:
                seen[(entry.day, slot, teacher)] += 1
    assert all(value == 1 for value in seen.values())


def test_free_hours_use_only_requested_categories():
    result = _engine().generate(_request(free_hour_categories=(" Library ", "", "Project")))

    free_types = {entry.free_type for entry in result.entries if entry.kind == "free"}
    assert free_types <= {"Library", "Project"}
    assert free_types


def test_regular_subjects_get_four_periods():
    result = _engine().generate(_request())

    assert result.is_complete
    for name in ("Operating Systems", "Computer Networks", "Software Engineering"):
        assert len(result.entries_for(name)) == 4


def test_same_seed_gives_same_timetable():
    first = _engine(seed=7).generate(_request())
    second = _engine(seed=7).generate(_request())
    assert first.entries == second.entries


def test_busy_commitments_are_respected():
    busy = frozenset((day, slot, "Ravi") for day in DAYS[:3] for slot in ORDINARY_SLOTS)
    result = _engine().generate(_request(busy_commitments=busy))

    for entry in result.entries:
        if "Ravi" in entry.teacher_ids:
            assert entry.day in DAYS[3:]


def test_senior_year_custom_days_shrink_the_grid():
    request = _request(
        year="4th Year",
        day_options=DayOptions(use_custom_days=True, selected_days=("Wednesday", "Monday")),
        requirements=(Requirement("Project Management", ("Ravi",)),),
    )
    result = _engine().generate(request)

    assert result.days == ["Monday", "Wednesday"]
    assert {entry.day for entry in result.entries} == {"Monday", "Wednesday"}
    assert len(result.entries) == 2 * len(GRID_ORDER)


def test_unplaceable_lab_is_reported_as_shortfall():
    request = _request(
        year="4th Year",
        day_options=DayOptions(use_custom_days=True, selected_days=("Monday",)),
        requirements=(
            Requirement("Networks Lab", ("Priya",), is_lab=True, batch="B1"),
            Requirement("OS Lab", ("Ravi",), is_lab=True, batch="B2"),
        ),
    )
    result = _engine().generate(request)

    assert not result.is_complete
    assert {item.requirement.subject_name for item in result.shortfalls} == {"Networks Lab", "OS Lab"}
    assert all(entry.kind != "lab" for entry in result.entries)


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"requirements": ()}, "At least one subject-teacher pair"),
        ({"free_hour_categories": (" ",)}, "free hour type"),
        ({"requirements": (Requirement("Compilers", ()),)}, "no teacher"),
        ({"requirements": (Requirement("Compilers", ("A", "B", "C")),)}, "more than 2"),
        ({"requirements": (Requirement("Compilers", ("A", "A")),)}, "same teacher"),
        ({"requirements": (Requirement("Compilers", ("A",), batch="B1"),)}, "not a lab"),
        (
            {"year": "4th Year", "day_options": DayOptions(use_custom_days=True)},
            "select at least one day",
        ),
    ],
)
def test_invalid_requests_are_rejected(overrides, message):
    with pytest.raises(RequirementValidationError, match=message):
        _engine().generate(_request(**overrides))
