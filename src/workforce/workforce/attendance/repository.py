from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_since(self, since: Optional[date] = None) -> Sequence[AttendanceRecord]:
        """Records on or after ``since`` (all when None), newest date first."""

        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert or replace the record keyed by (helper_id, date)."""

        raise NotImplementedError
