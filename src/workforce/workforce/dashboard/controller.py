from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        return jsonify({"success": True, "data": container.dashboard_service.summary()})

    @app.route("/api/data/status", methods=["GET"], endpoint="data_status")
    def data_status():
        data = container.data
        return jsonify(
            {
                "success": data.error is None,
                "loading": data.loading,
                "error": data.error,
                "failed": list(data.failed_collections),
            }
        )

    @app.route("/api/data/reload", methods=["POST"], endpoint="data_reload")
    def data_reload():
        """Manual retry: one collection when ``collection`` is given, else everything."""
        collection = request.args.get("collection")
        if collection:
            container.data.refetch(collection)
        else:
            container.data.load()
        return jsonify({"success": True, "message": "Data reloaded"})
