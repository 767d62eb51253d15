from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus, Shift
from ..core.exceptions import StoreError
from ..store.connection import StoreConnection
from ..store.rest_base import MERGE_DUPLICATES, execute, fetchone, gte, normalize_store_date, normalize_store_time
from .model import AttendanceRecord
from .repository import AttendanceRepository

TABLE = "attendance"
CONFLICT_KEY = "employee_id,date"


def attendance_from_row(row: Dict[str, Any]) -> AttendanceRecord:
    overtime = row.get("overtime_hours")
    return AttendanceRecord(
        id=str(row["id"]) if row.get("id") is not None else None,
        helper_id=str(row["employee_id"]),
        date=normalize_store_date(row["date"]),
        status=AttendanceStatus(row["status"]),
        shift=Shift(row["shift"]) if row.get("shift") else None,
        overtime_hours=float(overtime) if overtime is not None else None,
        check_in_time=normalize_store_time(row.get("check_in_time")),
        check_out_time=normalize_store_time(row.get("check_out_time")),
        department=row.get("department") or None,
    )


def attendance_to_row(record: AttendanceRecord) -> Dict[str, Any]:
    return {
        "employee_id": record.helper_id,
        "date": record.date.isoformat(),
        "status": record.status.value,
        "shift": record.shift.value if record.shift else None,
        "overtime_hours": record.overtime_hours,
        "check_in_time": record.check_in_time or None,
        "check_out_time": record.check_out_time or None,
        "department": record.department or None,
    }


class RestAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: StoreConnection):
        self._conn = conn

    def list_since(self, since: Optional[date] = None) -> Sequence[AttendanceRecord]:
        params = {"select": "*", "order": "date.desc"}
        if since is not None:
            params["date"] = gte(since.isoformat())
        rows = execute(self._conn, "GET", TABLE, params=params)
        return [attendance_from_row(r) for r in rows]

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        rows = execute(
            self._conn,
            "POST",
            TABLE,
            params={"on_conflict": CONFLICT_KEY},
            payload=[attendance_to_row(record)],
            prefer=MERGE_DUPLICATES,
        )
        row = fetchone(rows)
        if not row:
            raise StoreError(f"POST {TABLE} returned no row")
        return attendance_from_row(row)
