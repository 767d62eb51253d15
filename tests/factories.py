from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from src.workforce.workforce.attendance.model import AttendanceRecord
from src.workforce.workforce.core.enums import AttendanceStatus, HelperStatus, Shift
from src.workforce.workforce.core.exceptions import StoreError
from src.workforce.workforce.helpers.model import Helper, HelperUpdate, NewHelper, apply_update, resolve_photo

TODAY = date(2024, 3, 10)
NOW = datetime(2024, 3, 10, 8, 45)


def make_helper(
    id: str,
    name: str,
    *,
    employee_id: Optional[str] = None,
    company_id: str = "c1",
    status: HelperStatus = HelperStatus.ACTIVE,
    department: Optional[str] = "Production",
    join_date: date = date(2023, 1, 1),
) -> Helper:
    return Helper(
        id=id,
        employee_id=employee_id or f"EMP-{id}",
        name=name,
        photo_url=f"https://cdn.example.com/{id}.png",
        company_id=company_id,
        designation="Helper",
        join_date=join_date,
        status=status,
        department=department,
    )


def present(helper_id: str, day: date, *, shift: Optional[Shift] = Shift.GEN, overtime: float = 0.0) -> AttendanceRecord:
    return AttendanceRecord(
        id=None,
        helper_id=helper_id,
        date=day,
        status=AttendanceStatus.PRESENT,
        shift=shift,
        overtime_hours=overtime,
        check_in_time="08:00",
    )


def marked(helper_id: str, day: date, status: AttendanceStatus) -> AttendanceRecord:
    return AttendanceRecord(id=None, helper_id=helper_id, date=day, status=status)


class InMemoryContractors:
    def __init__(self, contractors=()):
        self.contractors = list(contractors)
        self.fail = False

    def list_all(self):
        if self.fail:
            raise StoreError("GET companies returned HTTP 500", status_code=500)
        return list(self.contractors)


class InMemoryHelpers:
    def __init__(self, helpers=()):
        self.rows: dict[str, Helper] = {h.id: h for h in helpers}
        self.fail = False
        self.calls: list[str] = []
        self._seq = 100

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if self.fail:
            raise StoreError(f"{op} employees returned HTTP 500", status_code=500)

    def list_all(self):
        self._check("list")
        return list(self.rows.values())

    def insert(self, new_helper: NewHelper) -> Helper:
        self._check("insert")
        self._seq += 1
        helper = resolve_photo(
            Helper(
                id=f"h{self._seq}",
                employee_id=new_helper.employee_id,
                name=new_helper.name,
                photo_url=new_helper.photo_url or "",
                company_id=new_helper.company_id,
                designation=new_helper.designation,
                join_date=new_helper.join_date,
                status=new_helper.status,
                department=new_helper.department,
            )
        )
        self.rows[helper.id] = helper
        return helper

    def update(self, helper_id: str, update: HelperUpdate) -> None:
        self._check("update")
        self.rows[helper_id] = apply_update(self.rows[helper_id], update)

    def delete(self, helper_id: str) -> None:
        self._check("delete")
        self.rows.pop(helper_id, None)


class InMemoryAttendance:
    def __init__(self, records=()):
        self.rows: dict[tuple[str, date], AttendanceRecord] = {}
        self.fail = False
        self.calls: list[str] = []
        self.last_since: Optional[date] = None
        self._seq = 0
        for r in records:
            self._store(r)

    def _store(self, record: AttendanceRecord) -> AttendanceRecord:
        existing = self.rows.get(record.key)
        if existing is not None:
            record_id = existing.id
        else:
            self._seq += 1
            record_id = f"a{self._seq}"
        saved = replace(record, id=record_id)
        self.rows[record.key] = saved
        return saved

    def list_since(self, since: Optional[date] = None):
        self.calls.append("list")
        self.last_since = since
        if self.fail:
            raise StoreError("GET attendance returned HTTP 500", status_code=500)
        return [r for r in self.rows.values() if since is None or r.date >= since]

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        self.calls.append("upsert")
        if self.fail:
            raise StoreError("POST attendance returned HTTP 500", status_code=500)
        return self._store(record)
