from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import today_local
from ..container import Container
from ..core.constants import ALL_CONTRACTORS
from .model import MonthlyReport


def report_to_dict(report: MonthlyReport) -> dict:
    return {
        "month": report.month,
        "days_in_month": report.days_in_month,
        "contractor": report.contractor_filter,
        "contractor_label": report.contractor_label,
        "rows": [
            {
                "helper_id": r.helper_id,
                "employee_id": r.employee_id,
                "name": r.name,
                "contractor": r.contractor_name,
                "department": r.department,
                "days": list(r.cells),
                "present": r.present_count,
                "absent": r.absent_count,
                "leave": r.leave_count,
                "overtime": round(r.total_overtime, 2),
            }
            for r in report.rows
        ],
    }


def register(app: Flask, container: Container) -> None:
    def _filters() -> tuple[str, str]:
        month = request.args.get("month") or today_local().strftime("%Y-%m")
        contractor = request.args.get("contractor") or ALL_CONTRACTORS
        return month, contractor

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="reports_monthly")
    def reports_monthly():
        month, contractor = _filters()
        report = container.report_service.monthly_report(month=month, contractor=contractor)
        return jsonify({"success": True, "data": report_to_dict(report)})

    @app.route("/api/reports/monthly.csv", methods=["GET"], endpoint="reports_monthly_csv")
    def reports_monthly_csv():
        month, contractor = _filters()
        export = container.report_service.export_csv(month=month, contractor=contractor)
        return app.response_class(
            export.content,
            mimetype=export.mimetype,
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )

    @app.route("/api/reports/monthly.pdf", methods=["GET"], endpoint="reports_monthly_pdf")
    def reports_monthly_pdf():
        month, contractor = _filters()
        export = container.report_service.export_pdf(month=month, contractor=contractor)
        return send_file(
            io.BytesIO(export.content),
            mimetype=export.mimetype,
            as_attachment=True,
            download_name=export.filename,
        )

    @app.route("/api/reports/analytics", methods=["GET"], endpoint="reports_analytics")
    def reports_analytics():
        return jsonify({"success": True, "data": container.report_service.analytics()})
