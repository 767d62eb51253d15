from __future__ import annotations

from datetime import date
from typing import Optional

from ...attendance.model import AttendanceRecord
from ...core.constants import LABEL_ABSENT, LABEL_LEAVE, LABEL_NONE, LABEL_PRESENT
from ...core.enums import AttendanceStatus
from ...helpers.model import Helper
from ..model import DayCell
from .base import DayCellCalculator


class StandardDayCellCalculator(DayCellCalculator):
    """Standard rule: recorded days map to P/P-<shift>/A/L.

    A day without a record is inferred absent when it is not in the future
    and the helper is active; otherwise it is a neutral placeholder.
    """

    def classify(self, *, helper: Helper, record: Optional[AttendanceRecord], day: date, today: date) -> DayCell:
        if record is not None:
            if record.status == AttendanceStatus.PRESENT:
                label = f"{LABEL_PRESENT}-{record.shift.value}" if record.shift else LABEL_PRESENT
                return DayCell(label, AttendanceStatus.PRESENT, float(record.overtime_hours or 0))
            if record.status == AttendanceStatus.LEAVE:
                return DayCell(LABEL_LEAVE, AttendanceStatus.LEAVE)
            return DayCell(LABEL_ABSENT, AttendanceStatus.ABSENT)

        if day <= today and helper.is_active:
            return DayCell(LABEL_ABSENT, AttendanceStatus.ABSENT)
        return DayCell(LABEL_NONE)
