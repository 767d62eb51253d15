from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, Shift


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one helper's attendance on one day.

    At most one record exists per ``(helper_id, date)``; ``shift`` and
    ``overtime_hours`` only carry meaning when the status is present.
    """

    id: Optional[str]
    helper_id: str
    date: date
    status: AttendanceStatus
    shift: Optional[Shift] = None
    overtime_hours: Optional[float] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    department: Optional[str] = None

    @property
    def key(self) -> tuple[str, date]:
        return self.helper_id, self.date

    @property
    def is_present(self) -> bool:
        return self.status == AttendanceStatus.PRESENT
