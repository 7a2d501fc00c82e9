from __future__ import annotations

from classgrid.core.exceptions import RequirementValidationError
from classgrid.services.scheduling.models import GenerationRequest, Requirement
from classgrid.services.scheduling.slot_grid import DAYS, SENIOR_YEAR

MAX_TEACHERS_PER_REQUIREMENT = 2


def validate_requirement(requirement: Requirement, position: int) -> None:
    context = {"position": position, "subject_name": requirement.subject_name}
    if not requirement.subject_name or not requirement.subject_name.strip():
        raise RequirementValidationError("Requirement is missing a subject name", details=context)
    teachers = [teacher.strip() for teacher in requirement.teacher_ids]
    if not teachers or any(not teacher for teacher in teachers):
        raise RequirementValidationError(
            f"{requirement.subject_name} has no teacher assigned", details=context
        )
    if len(teachers) > MAX_TEACHERS_PER_REQUIREMENT:
        raise RequirementValidationError(
            f"{requirement.subject_name} lists more than {MAX_TEACHERS_PER_REQUIREMENT} teachers",
            details=context,
        )
    if len(set(teachers)) != len(teachers):
        raise RequirementValidationError(
            f"{requirement.subject_name} lists the same teacher twice", details=context
        )
    if requirement.batch and not requirement.is_lab:
        raise RequirementValidationError(
            f"{requirement.subject_name} has a batch label but is not a lab", details=context
        )


def validate_request(request: GenerationRequest) -> None:
    if not request.requirements:
        raise RequirementValidationError("At least one subject-teacher pair is required")
    for position, requirement in enumerate(request.requirements):
        validate_requirement(requirement, position)

    categories = [category for category in request.free_hour_categories if category and category.strip()]
    if not categories:
        raise RequirementValidationError("At least one free hour type is required")

    options = request.day_options
    if request.year == SENIOR_YEAR and options.use_custom_days:
        unknown = sorted(set(options.selected_days) - set(DAYS))
        if unknown:
            raise RequirementValidationError(
                f"Invalid day selection: {', '.join(unknown)}", details={"days": unknown}
            )
        if not options.selected_days:
            raise RequirementValidationError("Please select at least one day")
