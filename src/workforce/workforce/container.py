from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from .attendance.repository import AttendanceRepository
from .attendance.rest_attendance_repository import RestAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local, today_local
from .contractors.repository import ContractorRepository
from .contractors.rest_contractor_repository import RestContractorRepository
from .dashboard.service import DashboardService
from .data.workforce_data import WorkforceData
from .helpers.repository import HelperRepository
from .helpers.rest_helper_repository import RestHelperRepository
from .helpers.service import HelperService
from .id_cards.service import IdCardService
from .reports.service import ReportService
from .store.connection import StoreConfig, StoreConnection


@dataclass(frozen=True)
class Container:
    conn: Optional[StoreConnection]

    contractors_repo: ContractorRepository
    helpers_repo: HelperRepository
    attendance_repo: AttendanceRepository

    data: WorkforceData

    helper_service: HelperService
    attendance_service: AttendanceService
    report_service: ReportService
    dashboard_service: DashboardService
    id_card_service: IdCardService


def build_services(
    *,
    contractors_repo: ContractorRepository,
    helpers_repo: HelperRepository,
    attendance_repo: AttendanceRepository,
    conn: Optional[StoreConnection] = None,
    attendance_lookback_days: int = 0,
    today: Callable[[], date] = today_local,
    now: Callable[[], datetime] = now_local,
) -> Container:
    """Wire the data layer and services over any repository implementations."""
    data = WorkforceData(
        contractors_repo,
        helpers_repo,
        attendance_repo,
        attendance_lookback_days=attendance_lookback_days,
        today=today,
    )
    return Container(
        conn=conn,
        contractors_repo=contractors_repo,
        helpers_repo=helpers_repo,
        attendance_repo=attendance_repo,
        data=data,
        helper_service=HelperService(data),
        attendance_service=AttendanceService(data, now=now),
        report_service=ReportService(data, today=today),
        dashboard_service=DashboardService(data, today=today),
        id_card_service=IdCardService(data),
    )


def build_container(*, store_config: StoreConfig, attendance_lookback_days: int = 0) -> Container:
    conn = StoreConnection.get_instance(store_config)
    return build_services(
        contractors_repo=RestContractorRepository(conn),
        helpers_repo=RestHelperRepository(conn),
        attendance_repo=RestAttendanceRepository(conn),
        conn=conn,
        attendance_lookback_days=attendance_lookback_days,
    )
