from __future__ import annotations

import csv
import io
from datetime import date

from src.workforce.workforce.contractors.model import Contractor
from src.workforce.workforce.core.enums import AttendanceStatus, CellStyle, Shift
from src.workforce.workforce.reports.engine import build_monthly_report
from src.workforce.workforce.reports.exporters.csv_exporter import csv_filename, header_row, report_to_csv
from src.workforce.workforce.reports.exporters.pdf_exporter import build_table_layout, pdf_filename, render_report_pdf
from tests.factories import make_helper, marked, present

CONTRACTORS = [Contractor(id="c1", name="Acme, Labour & Sons")]


def _report():
    helpers = [
        make_helper("h1", "Asha Rao", department=None),
        make_helper("h2", 'Bilal "BK" Khan', department="Packaging"),
    ]
    records = [
        present("h1", date(2024, 2, 1), shift=Shift.B, overtime=1.5),
        marked("h2", date(2024, 2, 1), AttendanceStatus.LEAVE),
    ]
    return build_monthly_report(helpers, records, "2024-02", today=date(2024, 2, 2), contractors=CONTRACTORS)


def _parse_csv(content: bytes) -> list[list[str]]:
    return list(csv.reader(io.StringIO(content.decode("utf-8-sig"))))


def test_csv_layout():
    report = _report()
    content = report_to_csv(report)

    assert content.startswith(b"\xef\xbb\xbf")
    assert b"\r\n" in content
    rows = _parse_csv(content)
    assert rows[0][:4] == ["Helper ID", "Helper Name", "Contractor", "Department"]
    assert rows[0][4:33] == [str(d) for d in range(1, 30)]
    assert rows[0][33:] == ["Present", "Absent", "Leave", "Overtime (hrs)"]
    assert len(rows) == 3

    asha = rows[1]
    assert asha[:4] == ["EMP-h1", "Asha Rao", "Acme, Labour & Sons", "N/A"]
    assert asha[4:7] == ["P-B", "A", "-"]
    assert asha[33:] == ["1", "1", "0", "1.5"]

    bilal = rows[2]
    assert bilal[1] == 'Bilal "BK" Khan'
    assert bilal[4] == "L"


def test_csv_of_empty_report_has_header_only():
    report = build_monthly_report([], [], "2024-02", today=date(2024, 2, 2))

    rows = _parse_csv(report_to_csv(report))

    assert rows == [header_row(report)]
    assert csv_filename(report) == "Attendance-Report-2024-02.csv"


def test_pdf_table_matches_csv_rows():
    report = _report()
    csv_rows = _parse_csv(report_to_csv(report))[1:]

    layout = build_table_layout(report)

    assert layout.body == csv_rows
    assert layout.first_day_column == 4
    assert layout.summary_column == 33
    assert layout.head[0][4] == "Days"
    assert layout.head[0][33] == "Summary"
    assert layout.head[1][33:] == ["P", "A", "L", "OT"]
    assert layout.day_styles[0][:3] == [CellStyle.SUCCESS, CellStyle.ERROR, CellStyle.MUTED]
    assert layout.day_styles[1][0] == CellStyle.WARNING


def test_render_pdf():
    report = _report()

    content = render_report_pdf(report)

    assert content.startswith(b"%PDF")
    assert pdf_filename(report) == "Attendance-Report-2024-02.pdf"


def test_render_pdf_for_empty_report():
    report = build_monthly_report([], [], "2024-02", "c9", today=date(2024, 2, 2))

    assert render_report_pdf(report).startswith(b"%PDF")
