from __future__ import annotations

import csv
import io

from ...core.constants import NOT_AVAILABLE
from ..model import MonthlyReport, ReportRow

IDENTITY_HEADERS = ["Helper ID", "Helper Name", "Contractor", "Department"]
SUMMARY_HEADERS = ["Present", "Absent", "Leave", "Overtime (hrs)"]


def csv_filename(report: MonthlyReport) -> str:
    return f"Attendance-Report-{report.month}.csv"


def format_overtime(value: float) -> str:
    return f"{value:.1f}"


def header_row(report: MonthlyReport) -> list[str]:
    return [*IDENTITY_HEADERS, *(str(d) for d in report.day_numbers), *SUMMARY_HEADERS]


def csv_row(row: ReportRow) -> list[object]:
    return [
        row.employee_id,
        row.name,
        row.contractor_name,
        row.department or NOT_AVAILABLE,
        *row.cells,
        row.present_count,
        row.absent_count,
        row.leave_count,
        format_overtime(row.total_overtime),
    ]


def report_to_csv(report: MonthlyReport) -> bytes:
    """Write report rows to CSV bytes (UTF-8 with BOM so spreadsheets detect it)."""

    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerow(header_row(report))
    for row in report.rows:
        writer.writerow(csv_row(row))
    return out.getvalue().encode("utf-8-sig")
