from classgrid.services.scheduling.engine import TimetableEngine  # noqa: F401
from classgrid.services.scheduling.ledger import AllocationLedger  # noqa: F401
from classgrid.services.scheduling.models import (  # noqa: F401
    DayOptions,
    GenerationRequest,
    GenerationResult,
    Requirement,
    ScheduleEntry,
    Shortfall,
    StoredSchedule,
)
from classgrid.services.scheduling.slot_grid import (  # noqa: F401
    AFTERNOON_BLOCK,
    DAYS,
    LAB_BLOCKS,
    MORNING_BLOCK,
    ORDINARY_SLOTS,
    active_days,
)
