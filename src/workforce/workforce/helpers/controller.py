from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.constants import ALL_CONTRACTORS, DEPARTMENTS, DESIGNATIONS
from .model import Helper


def helper_to_dict(h: Helper) -> dict:
    return {
        "id": h.id,
        "employee_id": h.employee_id,
        "name": h.name,
        "photo_url": h.photo_url,
        "company_id": h.company_id,
        "designation": h.designation,
        "join_date": h.join_date.isoformat(),
        "status": h.status.value,
        "department": h.department,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/helpers", methods=["GET"], endpoint="helpers_list")
    def helpers_list():
        helpers = container.helper_service.list_helpers(
            search=request.args.get("search", ""),
            contractor_id=request.args.get("contractor", ALL_CONTRACTORS),
            department=request.args.get("department") or None,
        )
        return jsonify({"success": True, "data": [helper_to_dict(h) for h in helpers]})

    @app.route("/api/helpers/next-id", methods=["GET"], endpoint="helpers_next_id")
    def helpers_next_id():
        return jsonify({"success": True, "employee_id": container.helper_service.next_employee_id()})

    @app.route("/api/helpers/form-options", methods=["GET"], endpoint="helpers_form_options")
    def helpers_form_options():
        return jsonify({"success": True, "departments": list(DEPARTMENTS), "designations": list(DESIGNATIONS)})

    @app.route("/api/helpers/<helper_id>", methods=["GET"], endpoint="helpers_get")
    def helpers_get(helper_id: str):
        return jsonify({"success": True, "data": helper_to_dict(container.helper_service.get(helper_id))})

    @app.route("/api/helpers", methods=["POST"], endpoint="helpers_create")
    def helpers_create():
        helper = container.helper_service.create(request.get_json(silent=True) or {})
        return jsonify({"success": True, "message": "Helper added", "data": helper_to_dict(helper)}), 201

    @app.route("/api/helpers/<helper_id>", methods=["PATCH"], endpoint="helpers_update")
    def helpers_update(helper_id: str):
        helper = container.helper_service.update(helper_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "message": "Helper updated", "data": helper_to_dict(helper)})

    @app.route("/api/helpers/<helper_id>", methods=["DELETE"], endpoint="helpers_delete")
    def helpers_delete(helper_id: str):
        container.helper_service.delete(helper_id)
        return jsonify({"success": True, "message": "Helper deleted"})
