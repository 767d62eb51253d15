from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/contractors", methods=["GET"], endpoint="contractors_list")
    def contractors_list():
        counts = container.dashboard_service.contractor_headcounts()
        return jsonify(
            {
                "success": True,
                "data": [{"id": c.contractor.id, "name": c.contractor.name, "helpers": c.helpers} for c in counts],
            }
        )
