from classgrid.models.faculty import Faculty  # noqa: F401
from classgrid.models.subject import Subject  # noqa: F401
from classgrid.models.timetable import Timetable  # noqa: F401
