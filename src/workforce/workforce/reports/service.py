from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from loguru import logger

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import today_local
from ..core.constants import ALL_CONTRACTORS, DEPARTMENTS, UNASSIGNED_DEPARTMENT
from ..core.enums import AttendanceStatus, HelperStatus
from ..data.workforce_data import Snapshot, WorkforceData
from .calculator.base import DayCellCalculator
from .calculator.standard_calculator import StandardDayCellCalculator
from .engine import build_monthly_report
from .exporters.csv_exporter import csv_filename, report_to_csv
from .exporters.pdf_exporter import pdf_filename, render_report_pdf
from .model import MonthlyReport


@dataclass(frozen=True)
class ExportFile:
    filename: str
    mimetype: str
    content: bytes


@dataclass(frozen=True)
class StatusBreakdown:
    label: str
    present: int
    absent: int
    leave: int

    def to_dict(self) -> dict:
        return {"label": self.label, "present": self.present, "absent": self.absent, "leave": self.leave}


def _empty_counts() -> dict[AttendanceStatus, int]:
    return {AttendanceStatus.PRESENT: 0, AttendanceStatus.ABSENT: 0, AttendanceStatus.LEAVE: 0}


class ReportService:
    """Use case: monthly attendance report, its exports and report analytics."""

    def __init__(
        self,
        data: WorkforceData,
        *,
        calculator: Optional[DayCellCalculator] = None,
        today: Callable[[], date] = today_local,
    ):
        self._data = data
        self._calculator = calculator or StandardDayCellCalculator()
        self._today = today

    def monthly_report(self, *, month: str, contractor: Optional[str] = ALL_CONTRACTORS) -> MonthlyReport:
        snap = self._data.snapshot()
        return build_monthly_report(
            snap.helpers,
            snap.attendance,
            month,
            contractor,
            today=self._today(),
            contractors=snap.contractors,
            calculator=self._calculator,
        )

    def export_csv(self, *, month: str, contractor: Optional[str] = ALL_CONTRACTORS) -> ExportFile:
        report = self.monthly_report(month=month, contractor=contractor)
        logger.info(f"CSV export {report.month} contractor={report.contractor_filter} rows={len(report.rows)}")
        return ExportFile(csv_filename(report), "text/csv", report_to_csv(report))

    def export_pdf(self, *, month: str, contractor: Optional[str] = ALL_CONTRACTORS) -> ExportFile:
        report = self.monthly_report(month=month, contractor=contractor)
        logger.info(f"PDF export {report.month} contractor={report.contractor_filter} rows={len(report.rows)}")
        return ExportFile(pdf_filename(report), "application/pdf", render_report_pdf(report))

    def analytics(self) -> dict:
        """Headline metrics and status breakdowns over the loaded attendance."""
        snap = self._data.snapshot()
        return {
            "total_helpers": len(snap.helpers),
            "active_helpers": sum(1 for h in snap.helpers if h.status == HelperStatus.ACTIVE),
            "total_contractors": len(snap.contractors),
            "overall_attendance_rate": overall_attendance_rate(snap),
            "by_department": [b.to_dict() for b in attendance_by_department(snap)],
            "by_contractor": [b.to_dict() for b in attendance_by_contractor(snap)],
        }


def _known_attendance(snap: Snapshot) -> list[AttendanceRecord]:
    """Records of helpers still on the roll; rows kept for deleted helpers are skipped."""
    known = {h.id for h in snap.helpers}
    return [a for a in snap.attendance if a.helper_id in known]


def overall_attendance_rate(snap: Snapshot) -> str:
    records = _known_attendance(snap)
    total = len(records)
    present = sum(1 for a in records if a.status == AttendanceStatus.PRESENT)
    rate = (present / total) * 100 if total else 0.0
    return f"{rate:.1f}%"


def attendance_by_department(snap: Snapshot) -> list[StatusBreakdown]:
    stats: dict[str, dict[AttendanceStatus, int]] = {
        dep: _empty_counts() for dep in (*DEPARTMENTS, UNASSIGNED_DEPARTMENT)
    }
    for record in _known_attendance(snap):
        dep = record.department or UNASSIGNED_DEPARTMENT
        stats.setdefault(dep, _empty_counts())[record.status] += 1
    return _non_empty(stats)


def attendance_by_contractor(snap: Snapshot) -> list[StatusBreakdown]:
    stats: dict[str, dict[AttendanceStatus, int]] = {c.name: _empty_counts() for c in snap.contractors}
    company_of = {h.id: h.company_id for h in snap.helpers}
    names = {c.id: c.name for c in snap.contractors}
    for record in snap.attendance:
        name = names.get(company_of.get(record.helper_id, ""))
        # records of deleted helpers or unknown contractors are skipped
        if name is None:
            continue
        stats.setdefault(name, _empty_counts())[record.status] += 1
    return _non_empty(stats)


def _non_empty(stats: dict[str, dict[AttendanceStatus, int]]) -> list[StatusBreakdown]:
    out = []
    for label, counts in stats.items():
        if sum(counts.values()) == 0:
            continue
        out.append(
            StatusBreakdown(
                label=label,
                present=counts[AttendanceStatus.PRESENT],
                absent=counts[AttendanceStatus.ABSENT],
                leave=counts[AttendanceStatus.LEAVE],
            )
        )
    return out
