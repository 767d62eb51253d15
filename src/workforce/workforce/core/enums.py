from __future__ import annotations

from enum import Enum


class HelperStatus(str, Enum):
    """Employment state of a helper."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Attendance state stored for one helper on one day."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"


class Shift(str, Enum):
    """Coded work period, only meaningful on present days."""

    A = "A"
    B = "B"
    C = "C"
    GEN = "Gen"
    EVENING = "Evening"


class CellStyle(str, Enum):
    """Visual class of a report day cell."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    MUTED = "muted"
