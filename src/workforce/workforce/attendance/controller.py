from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.constants import ALL_CONTRACTORS
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def _parse_date(value: str) -> date:
    try:
        return parse_iso_date((value or "").strip())
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD", field_errors={"date": "Invalid date"})


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "id": r.id,
        "helper_id": r.helper_id,
        "date": r.date.isoformat(),
        "status": r.status.value,
        "shift": r.shift.value if r.shift else None,
        "overtime_hours": r.overtime_hours,
        "check_in_time": r.check_in_time,
        "check_out_time": r.check_out_time,
        "department": r.department,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<day>", methods=["GET"], endpoint="attendance_day")
    def attendance_day(day: str):
        work_date = _parse_date(day)
        rows = container.attendance_service.daily_sheet(
            work_date,
            search=request.args.get("search", ""),
            contractor_id=request.args.get("contractor", ALL_CONTRACTORS),
            department=request.args.get("department") or None,
        )
        return jsonify(
            {
                "success": True,
                "date": work_date.isoformat(),
                "stats": container.attendance_service.day_stats(work_date).to_dict(),
                "data": [r.to_dict() for r in rows],
            }
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    def attendance_mark():
        body = request.get_json(silent=True) or {}
        record = container.attendance_service.mark(
            str(body.get("helper_id", "")),
            _parse_date(body.get("date", "")),
            body.get("status"),
            body.get("shift"),
        )
        return jsonify({"success": True, "data": record_to_dict(record)})

    @app.route("/api/attendance/overtime", methods=["POST"], endpoint="attendance_overtime")
    def attendance_overtime():
        body = request.get_json(silent=True) or {}
        record = container.attendance_service.set_overtime(
            str(body.get("helper_id", "")),
            _parse_date(body.get("date", "")),
            body.get("hours"),
        )
        return jsonify({"success": True, "data": record_to_dict(record)})
