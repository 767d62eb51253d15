from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from loguru import logger
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_setup import configure_logging
from .container import Container, build_container
from .contractors.controller import register as register_contractors
from .core.exceptions import ConfigurationError, DataAccessError, LoadError, NotFoundError, ValidationError
from .dashboard.controller import register as register_dashboard
from .helpers.controller import register as register_helpers
from .id_cards.controller import register as register_id_cards
from .reports.controller import register as register_reports
from .store.connection import StoreConfig


def load_store_config(settings) -> StoreConfig:
    url = (getattr(settings, "SUPABASE_URL", "") or "").strip()
    key = (getattr(settings, "SUPABASE_ANON_KEY", "") or "").strip()
    if not url or not key:
        raise ConfigurationError("Missing Supabase environment variables")
    return StoreConfig(url=url, anon_key=key, timeout=float(getattr(settings, "STORE_TIMEOUT_SECONDS", 10)))


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"success": False, "message": str(e), "errors": e.field_errors}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"success": False, "message": str(e)}), 404

    @app.errorhandler(DataAccessError)
    def _data_access(e: DataAccessError):
        body = {"success": False, "message": str(e)}
        if isinstance(e, LoadError):
            body["failed"] = list(e.failed)
        return jsonify(body), 502

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "message": e.description}), e.code
        logger.exception("Unhandled error")
        return jsonify({"success": False, "message": "Internal error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))

    if container is None:
        store_config = load_store_config(settings)
        logger.info(f"settings={settings_module} store={store_config.url}")
        container = build_container(
            store_config=store_config,
            attendance_lookback_days=int(getattr(settings, "ATTENDANCE_LOOKBACK_DAYS", 0)),
        )
        try:
            container.data.load()
        except LoadError as e:
            # the app still starts; clients retry through /api/data/reload
            logger.error(f"Initial load incomplete: {', '.join(e.failed)}")

    app.extensions["workforce"] = container

    register_error_handlers(app)
    register_contractors(app, container)
    register_helpers(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_dashboard(app, container)
    register_id_cards(app, container)

    return app
