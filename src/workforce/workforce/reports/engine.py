"""Monthly attendance grid.

``build_monthly_report`` is a pure function of its inputs: no store access,
no clock reads. The caller passes ``today`` once, so every cell of a run is
judged against the same date.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from loguru import logger

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import month_dates, parse_month
from ..contractors.model import Contractor
from ..core.constants import ALL_CONTRACTORS, LABEL_ABSENT, LABEL_LEAVE, LABEL_PRESENT, NOT_AVAILABLE
from ..core.enums import AttendanceStatus, CellStyle
from ..helpers.model import Helper
from .calculator.base import DayCellCalculator
from .calculator.standard_calculator import StandardDayCellCalculator
from .model import MonthlyReport, ReportRow


def is_all_contractors(contractor_filter: Optional[str]) -> bool:
    return not contractor_filter or contractor_filter == ALL_CONTRACTORS


def contractor_label(contractors: Sequence[Contractor], contractor_filter: Optional[str]) -> str:
    if is_all_contractors(contractor_filter):
        return "All Contractors"
    return next((c.name for c in contractors if c.id == contractor_filter), NOT_AVAILABLE)


def cell_style(label: str) -> CellStyle:
    if label.startswith(LABEL_PRESENT):
        return CellStyle.SUCCESS
    if label == LABEL_ABSENT:
        return CellStyle.ERROR
    if label == LABEL_LEAVE:
        return CellStyle.WARNING
    return CellStyle.MUTED


def build_monthly_report(
    helpers: Sequence[Helper],
    attendance: Sequence[AttendanceRecord],
    month: str,
    contractor_filter: Optional[str] = ALL_CONTRACTORS,
    *,
    today: date,
    contractors: Sequence[Contractor] = (),
    calculator: Optional[DayCellCalculator] = None,
) -> MonthlyReport:
    """Build one report row per helper for ``month`` (``YYYY-MM``).

    A malformed month yields an empty report with zero days; a contractor
    filter that matches nobody yields zero rows.
    """
    calculator = calculator or StandardDayCellCalculator()
    contractor_filter = contractor_filter or ALL_CONTRACTORS
    label = contractor_label(contractors, contractor_filter)

    parsed = parse_month(month)
    if parsed is None:
        logger.warning(f"Malformed report month {month!r}, returning empty report")
        return MonthlyReport(month=month, days_in_month=0, contractor_filter=contractor_filter, contractor_label=label, rows=())

    year, mon = parsed
    days = month_dates(year, mon)

    by_key: dict[tuple[str, date], AttendanceRecord] = {
        a.key: a for a in attendance if a.date.year == year and a.date.month == mon
    }

    if is_all_contractors(contractor_filter):
        selected = list(helpers)
    else:
        selected = [h for h in helpers if h.company_id == contractor_filter]

    names = {c.id: c.name for c in contractors}

    rows = []
    for helper in selected:
        cells: list[str] = []
        counts = {AttendanceStatus.PRESENT: 0, AttendanceStatus.ABSENT: 0, AttendanceStatus.LEAVE: 0}
        overtime = 0.0
        for day in days:
            cell = calculator.classify(helper=helper, record=by_key.get((helper.id, day)), day=day, today=today)
            cells.append(cell.label)
            if cell.counts_as is not None:
                counts[cell.counts_as] += 1
            if cell.counts_as == AttendanceStatus.PRESENT:
                overtime += cell.overtime_hours

        rows.append(
            ReportRow(
                helper_id=helper.id,
                employee_id=helper.employee_id,
                name=helper.name,
                contractor_name=names.get(helper.company_id, NOT_AVAILABLE),
                department=helper.department,
                cells=tuple(cells),
                present_count=counts[AttendanceStatus.PRESENT],
                absent_count=counts[AttendanceStatus.ABSENT],
                leave_count=counts[AttendanceStatus.LEAVE],
                total_overtime=overtime,
            )
        )

    return MonthlyReport(
        month=f"{year:04d}-{mon:02d}",
        days_in_month=len(days),
        contractor_filter=contractor_filter,
        contractor_label=label,
        rows=tuple(rows),
    )
