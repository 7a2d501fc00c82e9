class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class RequirementValidationError(AppError):
    """Raised when a generation request is malformed before any placement runs."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=422, details=details)

class WorkloadCapExceededError(AppError):
    """Raised when a request would push one or more teachers over the subject cap."""
    def __init__(self, violations: list[dict], cap: int):
        names = ", ".join(item["teacher"] for item in violations)
        super().__init__(
            f"Workload cap of {cap} non-lab subjects exceeded for: {names}",
            status_code=409,
            details={"cap": cap, "violations": violations},
        )

class DuplicateTimetableError(AppError):
    """Raised when a timetable for the same year, branch and semester already exists."""
    def __init__(self, year: str, branch: str, semester: str):
        super().__init__(
            f"A timetable for {year} {branch} semester {semester} already exists",
            status_code=409,
            details={"year": year, "branch": branch, "semester": semester},
        )

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)
