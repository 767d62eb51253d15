from __future__ import annotations

from datetime import date

import pytest

from src.workforce.workforce.container import build_services
from src.workforce.workforce.contractors.model import Contractor
from src.workforce.workforce.core.enums import AttendanceStatus, HelperStatus, Shift
from tests.factories import (
    NOW,
    TODAY,
    InMemoryAttendance,
    InMemoryContractors,
    InMemoryHelpers,
    make_helper,
    marked,
    present,
)


@pytest.fixture
def contractors():
    return [Contractor(id="c1", name="Acme Labour"), Contractor(id="c2", name="Zenith Staffing")]


@pytest.fixture
def helpers():
    return [
        make_helper("h1", "Asha Rao", employee_id="EMP-1001", company_id="c1", department="Production"),
        make_helper("h2", "Bilal Khan", employee_id="EMP-1002", company_id="c2", department="Packaging"),
        make_helper(
            "h3",
            "Chitra Devi",
            employee_id="EMP-1003",
            company_id="c1",
            status=HelperStatus.INACTIVE,
            department=None,
        ),
    ]


@pytest.fixture
def repos(contractors, helpers):
    return (
        InMemoryContractors(contractors),
        InMemoryHelpers(helpers),
        InMemoryAttendance(
            [
                present("h1", TODAY, shift=Shift.A, overtime=2.0),
                marked("h2", TODAY, AttendanceStatus.LEAVE),
                present("h1", date(2024, 3, 9)),
            ]
        ),
    )


@pytest.fixture
def container(repos):
    contractors_repo, helpers_repo, attendance_repo = repos
    c = build_services(
        contractors_repo=contractors_repo,
        helpers_repo=helpers_repo,
        attendance_repo=attendance_repo,
        today=lambda: TODAY,
        now=lambda: NOW,
    )
    c.data.load()
    return c


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.workforce.workforce.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()
