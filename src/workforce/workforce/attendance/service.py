from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import format_clock, now_local
from ..common.validators import parse_non_negative_float
from ..core.constants import ALL_CONTRACTORS, DEFAULT_SHIFT, NOT_AVAILABLE
from ..core.enums import AttendanceStatus, Shift
from ..core.exceptions import NotFoundError, ValidationError
from ..data.workforce_data import WorkforceData
from ..helpers.model import Helper
from ..helpers.service import filter_helpers
from .model import AttendanceRecord


@dataclass(frozen=True)
class DailySheetRow:
    helper: Helper
    contractor_name: str
    status: AttendanceStatus
    shift: Optional[Shift]
    overtime_hours: float
    check_in_time: Optional[str]
    check_out_time: Optional[str]

    def to_dict(self) -> dict:
        return {
            "helper_id": self.helper.id,
            "employee_id": self.helper.employee_id,
            "name": self.helper.name,
            "contractor": self.contractor_name,
            "department": self.helper.department,
            "status": self.status.value,
            "shift": self.shift.value if self.shift else None,
            "overtime_hours": self.overtime_hours,
            "check_in_time": self.check_in_time,
            "check_out_time": self.check_out_time,
        }


@dataclass(frozen=True)
class DayStats:
    present: int
    absent: int
    leave: int
    total: int

    def to_dict(self) -> dict:
        return {"present": self.present, "absent": self.absent, "leave": self.leave, "total": self.total}


def _coerce_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError("Status must be present, absent or leave", field_errors={"status": "Invalid status"})


def _coerce_shift(value: Any) -> Optional[Shift]:
    if value is None or value == "":
        return None
    try:
        return Shift(value)
    except ValueError:
        raise ValidationError("Shift must be one of A, B, C, Gen, Evening", field_errors={"shift": "Invalid shift"})


class AttendanceService:
    """Use case: mark daily attendance and overtime for active helpers."""

    def __init__(self, data: WorkforceData, *, now: Callable[[], datetime] = now_local):
        self._data = data
        self._now = now

    def _active_helper(self, helper_id: str, day: date) -> Helper:
        helper = self._data.get_helper(helper_id)
        if helper is None:
            raise NotFoundError("Helper not found")
        if not helper.is_active:
            raise ValidationError("Attendance can only be marked for active helpers")
        if day > self._now().date():
            raise ValidationError("Attendance cannot be marked for a future date")
        return helper

    def mark(self, helper_id: str, day: date, status: Any, shift: Any = None) -> AttendanceRecord:
        """Set the helper's status for ``day``.

        Present keeps an existing shift and overtime unless a new shift is
        given, defaults the shift to Gen and stamps the check-in time once.
        Absent and leave carry no shift or overtime.
        """
        new_status = _coerce_status(status)
        new_shift = _coerce_shift(shift)
        helper = self._active_helper(helper_id, day)
        existing = self._data.find_attendance(helper_id, day)

        if new_status == AttendanceStatus.PRESENT:
            record = AttendanceRecord(
                id=existing.id if existing else None,
                helper_id=helper_id,
                date=day,
                status=new_status,
                shift=new_shift or (existing.shift if existing else None) or Shift(DEFAULT_SHIFT),
                overtime_hours=(existing.overtime_hours if existing else None) or 0.0,
                check_in_time=(existing.check_in_time if existing else None) or format_clock(self._now()),
                check_out_time=existing.check_out_time if existing else None,
                department=helper.department,
            )
        else:
            record = AttendanceRecord(
                id=existing.id if existing else None,
                helper_id=helper_id,
                date=day,
                status=new_status,
                department=helper.department,
            )
        return self._data.upsert_attendance(record)

    def set_overtime(self, helper_id: str, day: date, hours: Any) -> AttendanceRecord:
        self._active_helper(helper_id, day)
        existing = self._data.find_attendance(helper_id, day)
        if existing is None or not existing.is_present:
            raise ValidationError("Overtime can only be set on a present day")

        return self._data.upsert_attendance(
            AttendanceRecord(
                id=existing.id,
                helper_id=existing.helper_id,
                date=existing.date,
                status=existing.status,
                shift=existing.shift,
                overtime_hours=parse_non_negative_float(hours),
                check_in_time=existing.check_in_time,
                check_out_time=existing.check_out_time,
                department=existing.department,
            )
        )

    def daily_sheet(
        self,
        day: date,
        *,
        search: str = "",
        contractor_id: Optional[str] = ALL_CONTRACTORS,
        department: Optional[str] = None,
    ) -> list[DailySheetRow]:
        snap = self._data.snapshot()
        names = {c.id: c.name for c in snap.contractors}
        records = {a.helper_id: a for a in snap.attendance if a.date == day}

        rows = []
        for helper in filter_helpers(
            snap.helpers, search=search, contractor_id=contractor_id, department=department, active_only=True
        ):
            record = records.get(helper.id)
            rows.append(
                DailySheetRow(
                    helper=helper,
                    contractor_name=names.get(helper.company_id, NOT_AVAILABLE),
                    status=record.status if record else AttendanceStatus.ABSENT,
                    shift=record.shift if record else None,
                    overtime_hours=float(record.overtime_hours or 0) if record else 0.0,
                    check_in_time=record.check_in_time if record else None,
                    check_out_time=record.check_out_time if record else None,
                )
            )
        return rows

    def day_stats(self, day: date) -> DayStats:
        snap = self._data.snapshot()
        return day_stats(snap.helpers, snap.attendance, day)


def day_stats(helpers, attendance, day: date) -> DayStats:
    """Present/leave from records; absent is inferred for the remaining active helpers."""
    known = {h.id for h in helpers}
    todays = [a for a in attendance if a.date == day and a.helper_id in known]
    present = sum(1 for a in todays if a.status == AttendanceStatus.PRESENT)
    leave = sum(1 for a in todays if a.status == AttendanceStatus.LEAVE)
    active = sum(1 for h in helpers if h.is_active)
    return DayStats(present=present, absent=max(0, active - present - leave), leave=leave, total=active)
