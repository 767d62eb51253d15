from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from ...attendance.model import AttendanceRecord
from ...helpers.model import Helper
from ..model import DayCell


class DayCellCalculator(ABC):
    """Calculator interface (Strategy Pattern for report day cells)."""

    @abstractmethod
    def classify(self, *, helper: Helper, record: Optional[AttendanceRecord], day: date, today: date) -> DayCell:
        raise NotImplementedError
