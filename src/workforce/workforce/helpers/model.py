from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Any, Optional

from ..common.photos import safe_photo_url
from ..core.enums import HelperStatus


class _Unset:
    """Marker for "field not supplied" in partial updates."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Helper:
    """Domain entity: a contract laborer.

    ``id`` is assigned by the store; ``employee_id`` is the human-readable
    code printed on ID cards (conventionally ``EMP-<n>``).
    """

    id: str
    employee_id: str
    name: str
    photo_url: str
    company_id: str
    designation: str
    join_date: date
    status: HelperStatus = HelperStatus.ACTIVE
    department: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == HelperStatus.ACTIVE


@dataclass(frozen=True)
class NewHelper:
    """Insert payload; the store assigns ``id``."""

    employee_id: str
    name: str
    company_id: str
    designation: str
    join_date: date
    status: HelperStatus = HelperStatus.ACTIVE
    photo_url: Optional[str] = None
    department: Optional[str] = None


@dataclass(frozen=True)
class HelperUpdate:
    """Partial update: only fields that are not UNSET are written.

    ``department=None`` clears the department; every other field ignores None.
    """

    employee_id: Any = UNSET
    name: Any = UNSET
    photo_url: Any = UNSET
    company_id: Any = UNSET
    designation: Any = UNSET
    join_date: Any = UNSET
    status: Any = UNSET
    department: Any = UNSET

    def changes(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is UNSET:
                continue
            if value is None and f.name != "department":
                continue
            out[f.name] = value
        return out

    def is_empty(self) -> bool:
        return not self.changes()


def resolve_photo(helper: Helper) -> Helper:
    return replace(helper, photo_url=safe_photo_url(helper.name, helper.photo_url))


def apply_update(helper: Helper, update: HelperUpdate) -> Helper:
    """Merge the supplied fields into ``helper`` and re-resolve the photo URL."""
    return resolve_photo(replace(helper, **update.changes()))
