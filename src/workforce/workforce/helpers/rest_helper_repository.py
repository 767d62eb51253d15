from __future__ import annotations

from typing import Any, Dict, Sequence

from ..core.enums import HelperStatus
from ..core.exceptions import StoreError
from ..store.connection import StoreConnection
from ..store.rest_base import RETURN_REPRESENTATION, eq, execute, fetchone, normalize_store_date
from .model import Helper, HelperUpdate, NewHelper, resolve_photo
from .repository import HelperRepository

TABLE = "employees"

# in-memory field -> wire column
WIRE_FIELDS = {
    "employee_id": "employee_id",
    "name": "name",
    "photo_url": "photo_url",
    "company_id": "company_id",
    "designation": "designation",
    "join_date": "join_date",
    "status": "status",
    "department": "department",
}


def helper_from_row(row: Dict[str, Any]) -> Helper:
    return resolve_photo(
        Helper(
            id=str(row["id"]),
            employee_id=row["employee_id"],
            name=row["name"],
            photo_url=row.get("photo_url") or "",
            company_id=str(row["company_id"]),
            designation=row.get("designation") or "",
            join_date=normalize_store_date(row["join_date"]),
            status=HelperStatus(row.get("status") or HelperStatus.ACTIVE.value),
            department=row.get("department") or None,
        )
    )


def _wire_value(value: Any) -> Any:
    if isinstance(value, HelperStatus):
        return value.value
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


class RestHelperRepository(HelperRepository):
    def __init__(self, conn: StoreConnection):
        self._conn = conn

    def list_all(self) -> Sequence[Helper]:
        rows = execute(self._conn, "GET", TABLE, params={"select": "*", "order": "name.asc"})
        return [helper_from_row(r) for r in rows]

    def insert(self, new_helper: NewHelper) -> Helper:
        payload = {
            "employee_id": new_helper.employee_id,
            "name": new_helper.name,
            "photo_url": new_helper.photo_url or None,
            "company_id": new_helper.company_id,
            "designation": new_helper.designation,
            "join_date": new_helper.join_date.isoformat(),
            "status": new_helper.status.value,
            "department": new_helper.department or None,
        }
        rows = execute(self._conn, "POST", TABLE, payload=[payload], prefer=RETURN_REPRESENTATION)
        row = fetchone(rows)
        if not row:
            raise StoreError(f"POST {TABLE} returned no row")
        return helper_from_row(row)

    def update(self, helper_id: str, update: HelperUpdate) -> None:
        payload = {WIRE_FIELDS[k]: _wire_value(v) for k, v in update.changes().items()}
        if "department" in payload:
            payload["department"] = payload["department"] or None
        execute(self._conn, "PATCH", TABLE, params={"id": eq(helper_id)}, payload=payload)

    def delete(self, helper_id: str) -> None:
        execute(self._conn, "DELETE", TABLE, params={"id": eq(helper_id)})
