from __future__ import annotations

import csv
import io
from types import SimpleNamespace

import pytest

from src.workforce.workforce.core.exceptions import ConfigurationError
from src.workforce.workforce.main import load_store_config


def test_store_config_requires_url_and_key():
    with pytest.raises(ConfigurationError, match="Missing Supabase environment variables"):
        load_store_config(SimpleNamespace(SUPABASE_URL="https://abc.supabase.co", SUPABASE_ANON_KEY=" "))

    config = load_store_config(
        SimpleNamespace(SUPABASE_URL="https://abc.supabase.co", SUPABASE_ANON_KEY="anon", STORE_TIMEOUT_SECONDS=4)
    )
    assert config.timeout == 4.0


def test_list_contractors(client):
    body = client.get("/api/contractors").get_json()

    assert body["data"] == [
        {"id": "c1", "name": "Acme Labour", "helpers": 2},
        {"id": "c2", "name": "Zenith Staffing", "helpers": 1},
    ]


def test_list_and_get_helpers(client):
    listed = client.get("/api/helpers?contractor=c2").get_json()["data"]
    assert [h["id"] for h in listed] == ["h2"]

    assert client.get("/api/helpers/h1").get_json()["data"]["join_date"] == "2023-01-01"
    assert client.get("/api/helpers/nope").status_code == 404
    assert client.get("/api/helpers/next-id").get_json()["employee_id"] == "EMP-1004"


def test_form_options(client):
    body = client.get("/api/helpers/form-options").get_json()

    assert "Admin" in body["departments"]
    assert "Supervisor" in body["designations"]


def test_create_helper_validation_errors(client):
    resp = client.post("/api/helpers", json={"name": "Zoya Ali", "employeeId": "EMP-1001"})

    assert resp.status_code == 400
    errors = resp.get_json()["errors"]
    assert errors["employeeId"] == "Helper ID already exists"
    assert errors["companyId"] == "Contractor is required"


def test_create_update_delete_helper(client):
    created = client.post(
        "/api/helpers",
        json={"name": "Zoya Ali", "employeeId": "EMP-2001", "companyId": "c1", "designation": "Loader", "joinDate": "2024-01-02"},
    )
    assert created.status_code == 201
    helper_id = created.get_json()["data"]["id"]

    updated = client.patch(f"/api/helpers/{helper_id}", json={"designation": "Supervisor"})
    assert updated.get_json()["data"]["designation"] == "Supervisor"

    assert client.delete(f"/api/helpers/{helper_id}").status_code == 200
    assert client.get(f"/api/helpers/{helper_id}").status_code == 404


def test_store_failure_maps_to_502(client, repos):
    repos[1].fail = True

    resp = client.delete("/api/helpers/h1")

    assert resp.status_code == 502
    assert resp.get_json()["message"] == "Failed to delete helper"


def test_attendance_day_sheet(client):
    body = client.get("/api/attendance/2024-03-10").get_json()

    assert body["stats"] == {"present": 1, "absent": 0, "leave": 1, "total": 2}
    assert [r["status"] for r in body["data"]] == ["present", "leave"]
    assert client.get("/api/attendance/10-03-2024").status_code == 400


def test_mark_attendance_and_overtime(client):
    marked = client.post("/api/attendance", json={"helper_id": "h2", "date": "2024-03-09", "status": "present"})
    assert marked.get_json()["data"]["shift"] == "Gen"

    overtime = client.post("/api/attendance/overtime", json={"helper_id": "h2", "date": "2024-03-09", "hours": "1.5"})
    assert overtime.get_json()["data"]["overtime_hours"] == 1.5

    future = client.post("/api/attendance", json={"helper_id": "h2", "date": "2024-03-11", "status": "present"})
    assert future.status_code == 400


def test_monthly_report_json(client):
    data = client.get("/api/reports/monthly?month=2024-03&contractor=c1").get_json()["data"]

    assert data["days_in_month"] == 31
    assert data["contractor_label"] == "Acme Labour"
    assert data["rows"][0]["days"][9] == "P-A"


def test_monthly_report_csv_download(client):
    resp = client.get("/api/reports/monthly.csv?month=2024-03")

    assert resp.status_code == 200
    assert resp.headers["Content-Disposition"] == "attachment; filename=Attendance-Report-2024-03.csv"
    rows = list(csv.reader(io.StringIO(resp.data.decode("utf-8-sig"))))
    assert [r[1] for r in rows[1:]] == ["Asha Rao", "Bilal Khan", "Chitra Devi"]


def test_monthly_report_pdf_download(client):
    resp = client.get("/api/reports/monthly.pdf?month=2024-03")

    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert "Attendance-Report-2024-03.pdf" in resp.headers["Content-Disposition"]
    assert resp.data.startswith(b"%PDF")


def test_analytics_and_dashboard(client):
    assert client.get("/api/reports/analytics").get_json()["data"]["overall_attendance_rate"] == "66.7%"
    assert client.get("/api/dashboard").get_json()["data"]["total_helpers"] == 3


def test_id_card_download(client):
    resp = client.get("/api/id-cards/h1.pdf")

    assert resp.status_code == 200
    assert "ID-Card-Asha_Rao.pdf" in resp.headers["Content-Disposition"]
    assert client.get("/api/id-cards/nope.pdf").status_code == 404


def test_reload_reports_failed_collection(client, repos):
    repos[2].fail = True

    resp = client.post("/api/data/reload")

    assert resp.status_code == 502
    assert resp.get_json()["failed"] == ["attendance"]
    assert client.get("/api/data/status").get_json()["error"] == "Failed to load data"

    repos[2].fail = False
    assert client.post("/api/data/reload?collection=attendance").status_code == 200
    assert client.get("/api/data/status").get_json()["success"] is True


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nothing")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_status_lists_collections_still_failing(client, repos):
    repos[1].fail = True
    repos[2].fail = True
    client.post("/api/data/reload")

    repos[2].fail = False
    client.post("/api/data/reload?collection=attendance")
    body = client.get("/api/data/status").get_json()

    assert body["success"] is False
    assert body["failed"] == ["helpers"]


def test_installed_package_serves_the_api(repos, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    main = pytest.importorskip("workforce.main")
    container_module = pytest.importorskip("workforce.container")
    contractors_repo, helpers_repo, attendance_repo = repos
    container = container_module.build_services(
        contractors_repo=contractors_repo, helpers_repo=helpers_repo, attendance_repo=attendance_repo
    )
    container.data.load()

    client = main.create_app(container=container).test_client()

    assert client.get("/api/helpers/nope").status_code == 404
    assert len(client.get("/api/contractors").get_json()["data"]) == 2
