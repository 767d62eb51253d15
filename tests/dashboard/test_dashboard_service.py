from __future__ import annotations

from datetime import date


def test_today_split(container):
    split = container.dashboard_service.today_split()

    assert (split.present, split.absent, split.leave, split.total) == (1, 0, 1, 2)


def test_weekly_trend_oldest_first(container):
    trend = container.dashboard_service.weekly_trend()

    assert [p.day for p in trend] == [date(2024, 3, d) for d in range(4, 11)]
    assert [p.present for p in trend] == [0, 0, 0, 0, 0, 1, 1]


def test_recent_hires_newest_first(container):
    container.helper_service.create(
        {"name": "Zoya Ali", "employeeId": "EMP-2001", "companyId": "c1", "designation": "Loader", "joinDate": "2024-02-01"}
    )

    hires = container.dashboard_service.recent_hires(limit=2)

    assert hires[0].name == "Zoya Ali"
    assert len(hires) == 2


def test_contractor_headcounts(container):
    counts = {c.contractor.name: c.helpers for c in container.dashboard_service.contractor_headcounts()}

    assert counts == {"Acme Labour": 2, "Zenith Staffing": 1}


def test_summary(container):
    summary = container.dashboard_service.summary()

    assert summary["total_helpers"] == 3
    assert summary["active_helpers"] == 2
    assert summary["total_contractors"] == 2
    assert summary["today"]["present"] == 1
    assert len(summary["weekly_trend"]) == 7
