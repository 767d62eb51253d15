from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from loguru import logger

from ..common.datetime_utils import parse_iso_date
from ..common.validators import is_blank
from ..core.constants import ALL_CONTRACTORS, EMPLOYEE_ID_PREFIX, EMPLOYEE_ID_SEED
from ..core.enums import HelperStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..data.workforce_data import WorkforceData
from .model import Helper, HelperUpdate, NewHelper

_SUFFIX = re.compile(rf"^{re.escape(EMPLOYEE_ID_PREFIX)}(\d+)$")

# form key (as posted by clients) -> HelperForm attribute
FORM_KEYS = {
    "name": "name",
    "employeeId": "employee_id",
    "employee_id": "employee_id",
    "companyId": "company_id",
    "company_id": "company_id",
    "designation": "designation",
    "joinDate": "join_date",
    "join_date": "join_date",
    "status": "status",
    "department": "department",
    "photoUrl": "photo_url",
    "photo_url": "photo_url",
}


@dataclass(frozen=True)
class HelperForm:
    """Raw helper form input, before validation."""

    name: str = ""
    employee_id: str = ""
    company_id: str = ""
    designation: str = ""
    join_date: str = ""
    status: str = HelperStatus.ACTIVE.value
    department: Optional[str] = None
    photo_url: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HelperForm":
        return cls().merged(data)

    @classmethod
    def from_helper(cls, helper: Helper) -> "HelperForm":
        return cls(
            name=helper.name,
            employee_id=helper.employee_id,
            company_id=helper.company_id,
            designation=helper.designation,
            join_date=helper.join_date.isoformat(),
            status=helper.status.value,
            department=helper.department,
            photo_url=helper.photo_url,
        )

    def merged(self, data: Mapping[str, Any]) -> "HelperForm":
        """Overlay the keys present in ``data``; unknown keys are ignored."""
        values: dict[str, Any] = {}
        for key, value in data.items():
            attr = FORM_KEYS.get(key)
            if attr is None:
                continue
            if attr in ("department", "photo_url"):
                values[attr] = value.strip() if isinstance(value, str) and value.strip() else None
            else:
                values[attr] = "" if value is None else str(value).strip()
        return replace(self, **values)


def suggest_next_employee_id(helpers: Iterable[Helper]) -> str:
    """Highest numeric ``EMP-<n>`` suffix plus one (EMP-1001 when none parse)."""
    numbers = []
    for h in helpers:
        match = _SUFFIX.match(h.employee_id.strip())
        if match:
            numbers.append(int(match.group(1)))
    highest = max(numbers) if numbers else EMPLOYEE_ID_SEED
    return f"{EMPLOYEE_ID_PREFIX}{highest + 1}"


def clear_field_error(errors: Mapping[str, str], field: str) -> dict[str, str]:
    """Copy of ``errors`` without ``field``; used when the user edits that field."""
    return {k: v for k, v in errors.items() if k != field}


def validate_helper_form(
    form: HelperForm,
    *,
    helpers: Sequence[Helper],
    contractor_ids: Optional[set[str]] = None,
    editing_id: Optional[str] = None,
) -> dict[str, str]:
    errors: dict[str, str] = {}

    if is_blank(form.name):
        errors["name"] = "Full name is required"

    if is_blank(form.employee_id):
        errors["employeeId"] = "Helper ID is required"
    elif any(h.employee_id == form.employee_id and h.id != editing_id for h in helpers):
        errors["employeeId"] = "Helper ID already exists"

    if is_blank(form.company_id):
        errors["companyId"] = "Contractor is required"
    elif contractor_ids and form.company_id not in contractor_ids:
        errors["companyId"] = "Contractor does not exist"

    if is_blank(form.designation):
        errors["designation"] = "Designation is required"

    if is_blank(form.join_date):
        errors["joinDate"] = "Join date is required"
    else:
        try:
            parse_iso_date(form.join_date)
        except ValueError:
            errors["joinDate"] = "Join date must be YYYY-MM-DD"

    if form.status not in {s.value for s in HelperStatus}:
        errors["status"] = "Status must be active or inactive"

    return errors


def filter_helpers(
    helpers: Sequence[Helper],
    *,
    search: str = "",
    contractor_id: Optional[str] = ALL_CONTRACTORS,
    department: Optional[str] = None,
    active_only: bool = False,
) -> list[Helper]:
    term = (search or "").strip().lower()
    out = []
    for h in helpers:
        if term and term not in h.name.lower() and term not in h.employee_id.lower():
            continue
        if contractor_id and contractor_id != ALL_CONTRACTORS and h.company_id != contractor_id:
            continue
        if department and department != "all" and h.department != department:
            continue
        if active_only and not h.is_active:
            continue
        out.append(h)
    return out


class HelperService:
    """Use case: add, edit, delete and list helpers (admin)."""

    def __init__(self, data: WorkforceData):
        self._data = data

    def next_employee_id(self) -> str:
        return suggest_next_employee_id(self._data.helpers)

    def list_helpers(self, *, search: str = "", contractor_id: Optional[str] = ALL_CONTRACTORS, department: Optional[str] = None) -> list[Helper]:
        return filter_helpers(self._data.helpers, search=search, contractor_id=contractor_id, department=department)

    def get(self, helper_id: str) -> Helper:
        helper = self._data.get_helper(helper_id)
        if helper is None:
            raise NotFoundError("Helper not found")
        return helper

    def _validate(self, form: HelperForm, *, editing_id: Optional[str] = None) -> None:
        snap = self._data.snapshot()
        errors = validate_helper_form(
            form,
            helpers=snap.helpers,
            contractor_ids={c.id for c in snap.contractors},
            editing_id=editing_id,
        )
        if errors:
            logger.debug(f"Helper form rejected: {errors}")
            raise ValidationError(field_errors=errors)

    def create(self, data: Mapping[str, Any]) -> Helper:
        form = HelperForm.from_mapping(data)
        self._validate(form)
        return self._data.add_helper(
            NewHelper(
                employee_id=form.employee_id,
                name=form.name,
                company_id=form.company_id,
                designation=form.designation,
                join_date=parse_iso_date(form.join_date),
                status=HelperStatus(form.status),
                photo_url=form.photo_url,
                department=form.department,
            )
        )

    def update(self, helper_id: str, data: Mapping[str, Any]) -> Helper:
        current = self.get(helper_id)
        base = HelperForm.from_helper(current)
        form = base.merged(data)
        self._validate(form, editing_id=helper_id)

        changed: dict[str, Any] = {}
        for f in fields(HelperForm):
            new_value = getattr(form, f.name)
            if new_value == getattr(base, f.name):
                continue
            if f.name == "join_date":
                new_value = parse_iso_date(new_value)
            elif f.name == "status":
                new_value = HelperStatus(new_value)
            changed[f.name] = new_value
        return self._data.update_helper(helper_id, HelperUpdate(**changed))

    def delete(self, helper_id: str) -> None:
        self.get(helper_id)
        self._data.delete_helper(helper_id)
