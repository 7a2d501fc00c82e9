from __future__ import annotations

from collections.abc import Iterable

from classgrid.schemas.timetable import TimetableFormData
from classgrid.services.scheduling.models import DayOptions, GenerationRequest, Requirement, Shortfall


def requirements_from_form(form: TimetableFormData) -> tuple[Requirement, ...]:
    return tuple(
        Requirement(
            subject_name=pair.subject_name,
            teacher_ids=tuple(pair.teacher_ids),
            is_lab=pair.is_lab,
            batch=pair.batch,
            requirement_id=pair.id,
        )
        for pair in form.subject_teacher_pairs
    )


def generation_request_from_form(
    form: TimetableFormData,
    busy_commitments: Iterable[tuple[str, str, str]] = (),
) -> GenerationRequest:
    options = form.day_options
    return GenerationRequest(
        year=form.year,
        requirements=requirements_from_form(form),
        free_hour_categories=tuple(item.label for item in form.free_hours),
        day_options=DayOptions(
            four_continuous_days=options.four_continuous_days,
            use_custom_days=options.use_custom_days,
            selected_days=tuple(options.selected_days),
        ),
        enable_batch_rotation=form.enable_batch_rotation,
        busy_commitments=frozenset(busy_commitments),
    )


def shortfall_payload(shortfall: Shortfall) -> dict:
    requirement = shortfall.requirement
    return {
        "subject_name": requirement.subject_name,
        "teacher_ids": list(requirement.teacher_ids),
        "is_lab": requirement.is_lab,
        "batch": requirement.batch,
        "placed": shortfall.placed,
        "required": shortfall.required,
    }


def shortfall_warning(shortfalls: list[Shortfall]) -> str | None:
    if not shortfalls:
        return None
    names = ", ".join(sorted({item.requirement.subject_name for item in shortfalls}))
    return f"Some subjects could not be fully scheduled: {names}. Review the timetable before publishing."
