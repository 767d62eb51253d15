from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from ..attendance.service import DayStats, day_stats
from ..common.datetime_utils import last_n_days, today_local
from ..contractors.model import Contractor
from ..core.constants import DEFAULT_RECENT_HIRES, DEFAULT_TREND_DAYS
from ..core.enums import AttendanceStatus
from ..data.workforce_data import WorkforceData
from ..helpers.model import Helper


@dataclass(frozen=True)
class TrendPoint:
    day: date
    present: int


@dataclass(frozen=True)
class ContractorHeadcount:
    contractor: Contractor
    helpers: int


class DashboardService:
    """Read-only summaries over the cached collections."""

    def __init__(self, data: WorkforceData, *, today: Callable[[], date] = today_local):
        self._data = data
        self._today = today

    def today_split(self) -> DayStats:
        snap = self._data.snapshot()
        return day_stats(snap.helpers, snap.attendance, self._today())

    def weekly_trend(self, days: int = DEFAULT_TREND_DAYS) -> list[TrendPoint]:
        snap = self._data.snapshot()
        known = {h.id for h in snap.helpers}
        present_by_day: dict[date, int] = {}
        for a in snap.attendance:
            if a.status == AttendanceStatus.PRESENT and a.helper_id in known:
                present_by_day[a.date] = present_by_day.get(a.date, 0) + 1
        return [TrendPoint(day=d, present=present_by_day.get(d, 0)) for d in last_n_days(self._today(), days)]

    def recent_hires(self, limit: int = DEFAULT_RECENT_HIRES) -> list[Helper]:
        return sorted(self._data.helpers, key=lambda h: h.join_date, reverse=True)[:limit]

    def contractor_headcounts(self) -> list[ContractorHeadcount]:
        snap = self._data.snapshot()
        counts: dict[str, int] = {}
        for h in snap.helpers:
            counts[h.company_id] = counts.get(h.company_id, 0) + 1
        return [ContractorHeadcount(contractor=c, helpers=counts.get(c.id, 0)) for c in snap.contractors]

    def summary(self) -> dict:
        snap = self._data.snapshot()
        split = self.today_split()
        return {
            "total_helpers": len(snap.helpers),
            "active_helpers": split.total,
            "total_contractors": len(snap.contractors),
            "today": split.to_dict(),
            "weekly_trend": [{"date": p.day.isoformat(), "present": p.present} for p in self.weekly_trend()],
            "recent_hires": [
                {"id": h.id, "employee_id": h.employee_id, "name": h.name, "join_date": h.join_date.isoformat()}
                for h in self.recent_hires()
            ],
        }
