from __future__ import annotations

import io
from xml.sax.saxutils import escape
from dataclasses import dataclass

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ...core.constants import NOT_AVAILABLE
from ...core.enums import CellStyle
from ..engine import cell_style
from ..model import MonthlyReport
from .csv_exporter import format_overtime

IDENTITY_COLUMNS = ["Helper ID", "Helper", "Contractor", "Department"]
SUMMARY_COLUMNS = ["P", "A", "L", "OT"]

# (fill, text) per cell class
CELL_COLORS = {
    CellStyle.SUCCESS: ("#D1FAE5", "#065F46"),
    CellStyle.ERROR: ("#FEE2E2", "#991B1B"),
    CellStyle.WARNING: ("#FEF3C7", "#92400E"),
    CellStyle.MUTED: ("#F3F4F6", "#9CA3AF"),
}
HEADER_FILL = "#2C3E50"


@dataclass(frozen=True)
class TableLayout:
    """Table content and per-cell styling, derived only from report rows."""

    head: list[list[str]]
    body: list[list[str]]
    day_styles: list[list[CellStyle]]
    first_day_column: int
    days: int

    @property
    def summary_column(self) -> int:
        return self.first_day_column + self.days


def pdf_filename(report: MonthlyReport) -> str:
    return f"Attendance-Report-{report.month}.pdf"


def build_table_layout(report: MonthlyReport) -> TableLayout:
    first_day = len(IDENTITY_COLUMNS)
    days = report.days_in_month

    top = [*IDENTITY_COLUMNS, "Days", *([""] * (days - 1)), "Summary", "", "", ""]
    second = [*([""] * first_day), *(str(d) for d in report.day_numbers), *SUMMARY_COLUMNS]

    body = []
    styles = []
    for row in report.rows:
        body.append(
            [
                row.employee_id,
                row.name,
                row.contractor_name,
                row.department or NOT_AVAILABLE,
                *row.cells,
                str(row.present_count),
                str(row.absent_count),
                str(row.leave_count),
                format_overtime(row.total_overtime),
            ]
        )
        styles.append([cell_style(label) for label in row.cells])

    return TableLayout(head=[top, second], body=body, day_styles=styles, first_day_column=first_day, days=days)


def _table_style(layout: TableLayout) -> TableStyle:
    last_col = layout.summary_column + len(SUMMARY_COLUMNS) - 1
    commands = [
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("BACKGROUND", (0, 0), (-1, 1), colors.HexColor(HEADER_FILL)),
        ("TEXTCOLOR", (0, 0), (-1, 1), colors.white),
        ("FONTNAME", (0, 0), (-1, 1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 1), 7),
        ("FONTSIZE", (0, 2), (-1, -1), 6),
        ("FONTSIZE", (layout.first_day_column, 2), (layout.summary_column - 1, -1), 4.5),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("ALIGN", (0, 2), (layout.first_day_column - 1, -1), "LEFT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 1),
        ("RIGHTPADDING", (0, 0), (-1, -1), 1),
        ("SPAN", (layout.first_day_column, 0), (layout.summary_column - 1, 0)),
        ("SPAN", (layout.summary_column, 0), (last_col, 0)),
    ]
    for col in range(layout.first_day_column):
        commands.append(("SPAN", (col, 0), (col, 1)))

    for r, row_styles in enumerate(layout.day_styles, start=2):
        for offset, style in enumerate(row_styles):
            col = layout.first_day_column + offset
            fill, text = CELL_COLORS[style]
            commands.append(("BACKGROUND", (col, r), (col, r), colors.HexColor(fill)))
            commands.append(("TEXTCOLOR", (col, r), (col, r), colors.HexColor(text)))
    return TableStyle(commands)


def render_report_pdf(report: MonthlyReport) -> bytes:
    """Render the report as a landscape, paginated table document."""

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=landscape(A4),
        leftMargin=8 * mm,
        rightMargin=8 * mm,
        topMargin=10 * mm,
        bottomMargin=10 * mm,
        title=f"Attendance Report {report.month}",
    )
    styles = getSampleStyleSheet()
    story = [
        Paragraph("Monthly Attendance Report", styles["Title"]),
        Paragraph(f"Month: {escape(report.month)}", styles["Normal"]),
        Paragraph(f"Contractor: {escape(report.contractor_label)}", styles["Normal"]),
        Spacer(1, 4 * mm),
    ]

    if report.is_empty or report.days_in_month == 0:
        story.append(Paragraph("No helper data to display for the selected filters.", styles["Normal"]))
    else:
        layout = build_table_layout(report)
        widths = [18 * mm, 26 * mm, 22 * mm, 16 * mm]
        widths += [5.2 * mm] * layout.days
        widths += [6.5 * mm] * len(SUMMARY_COLUMNS)
        table = Table(layout.head + layout.body, colWidths=widths, repeatRows=2)
        table.setStyle(_table_style(layout))
        story.append(table)

    doc.build(story)
    return buf.getvalue()
