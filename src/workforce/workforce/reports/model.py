from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class DayCell:
    """Result of classifying one helper-day.

    ``counts_as`` is the status the day is counted under, or None for a
    neutral placeholder that contributes to no count.
    """

    label: str
    counts_as: Optional[AttendanceStatus] = None
    overtime_hours: float = 0.0


@dataclass(frozen=True)
class ReportRow:
    """Read-model: one helper's month grid plus summary counts."""

    helper_id: str
    employee_id: str
    name: str
    contractor_name: str
    department: Optional[str]
    cells: tuple[str, ...]
    present_count: int
    absent_count: int
    leave_count: int
    total_overtime: float


@dataclass(frozen=True)
class MonthlyReport:
    month: str
    days_in_month: int
    contractor_filter: str
    contractor_label: str
    rows: tuple[ReportRow, ...]

    @property
    def day_numbers(self) -> list[int]:
        return list(range(1, self.days_in_month + 1))

    @property
    def is_empty(self) -> bool:
        return not self.rows
