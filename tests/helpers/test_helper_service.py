from __future__ import annotations

from datetime import date

import pytest

from src.workforce.workforce.core.enums import HelperStatus
from src.workforce.workforce.core.exceptions import NotFoundError, ValidationError
from src.workforce.workforce.helpers.service import (
    HelperForm,
    clear_field_error,
    filter_helpers,
    suggest_next_employee_id,
    validate_helper_form,
)
from tests.factories import make_helper

VALID = {
    "name": "Zoya Ali",
    "employeeId": "EMP-2001",
    "companyId": "c1",
    "designation": "Loader",
    "joinDate": "2024-01-02",
}


def test_suggest_next_employee_id():
    helpers = [
        make_helper("a", "A", employee_id="EMP-1007"),
        make_helper("b", "B", employee_id="EMP-0999"),
        make_helper("c", "C", employee_id="TMP-5000"),
    ]

    assert suggest_next_employee_id(helpers) == "EMP-1008"
    assert suggest_next_employee_id([]) == "EMP-1001"


def test_validate_reports_every_missing_field():
    errors = validate_helper_form(HelperForm(), helpers=[])

    assert errors == {
        "name": "Full name is required",
        "employeeId": "Helper ID is required",
        "companyId": "Contractor is required",
        "designation": "Designation is required",
        "joinDate": "Join date is required",
    }


def test_validate_duplicate_id_ignores_the_helper_being_edited():
    existing = [make_helper("h1", "Asha Rao", employee_id="EMP-2001")]
    form = HelperForm.from_mapping(VALID)

    assert validate_helper_form(form, helpers=existing)["employeeId"] == "Helper ID already exists"
    assert validate_helper_form(form, helpers=existing, editing_id="h1") == {}


def test_validate_contractor_and_join_date():
    form = HelperForm.from_mapping({**VALID, "companyId": "c9", "joinDate": "02/01/2024"})

    errors = validate_helper_form(form, helpers=[], contractor_ids={"c1"})

    assert errors == {"companyId": "Contractor does not exist", "joinDate": "Join date must be YYYY-MM-DD"}


def test_clear_field_error():
    errors = {"name": "Full name is required", "employeeId": "Helper ID is required"}

    assert clear_field_error(errors, "name") == {"employeeId": "Helper ID is required"}
    assert "name" in errors


def test_filter_helpers(helpers):
    assert [h.id for h in filter_helpers(helpers, search="emp-1002")] == ["h2"]
    assert [h.id for h in filter_helpers(helpers, search="RAO")] == ["h1"]
    assert [h.id for h in filter_helpers(helpers, contractor_id="c1")] == ["h1", "h3"]
    assert [h.id for h in filter_helpers(helpers, department="Packaging")] == ["h2"]
    assert [h.id for h in filter_helpers(helpers, active_only=True)] == ["h1", "h2"]


def test_create_helper(container):
    helper = container.helper_service.create(VALID)

    assert helper.employee_id == "EMP-2001"
    assert helper.join_date == date(2024, 1, 2)
    assert helper.status == HelperStatus.ACTIVE
    assert container.helper_service.next_employee_id() == "EMP-2002"


def test_create_duplicate_is_rejected_before_store_call(container, repos):
    calls = list(repos[1].calls)

    with pytest.raises(ValidationError) as exc:
        container.helper_service.create({**VALID, "employeeId": "EMP-1001"})

    assert exc.value.field_errors == {"employeeId": "Helper ID already exists"}
    assert str(exc.value) == "Helper ID already exists"
    assert repos[1].calls == calls


def test_update_sends_only_changed_fields(container, repos, monkeypatch):
    sent = []
    original = repos[1].update

    def spy(helper_id, update):
        sent.append(update.changes())
        original(helper_id, update)

    monkeypatch.setattr(repos[1], "update", spy)

    helper = container.helper_service.update("h2", {"designation": "Supervisor", "name": "Bilal Khan"})

    assert sent == [{"designation": "Supervisor"}]
    assert helper.designation == "Supervisor"


def test_update_can_clear_department(container):
    helper = container.helper_service.update("h1", {"department": ""})

    assert helper.department is None


def test_update_and_delete_unknown_helper(container):
    with pytest.raises(NotFoundError):
        container.helper_service.update("nope", VALID)
    with pytest.raises(NotFoundError):
        container.helper_service.delete("nope")


def test_delete_helper(container):
    container.helper_service.delete("h2")

    assert [h.id for h in container.helper_service.list_helpers()] == ["h1", "h3"]
