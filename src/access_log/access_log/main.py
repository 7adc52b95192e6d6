from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.responses import error, internal_error
from .container import Container, build_container
from .database.bootstrap import ensure_indexes
from .logs.controller import register as register_logs
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)

    app = Flask(__name__)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SHOW_ERROR_DETAILS"] = bool(getattr(settings, "SHOW_ERROR_DETAILS", False))
    app.config["COOLDOWN_MS"] = int(getattr(settings, "COOLDOWN_MS", 3000))

    if container is None:
        container = build_container(
            mongo_uri=getattr(settings, "MONGO_URI", None),
            mongo_db_name=getattr(settings, "MONGO_DB_NAME", "rfid_access"),
            cooldown_ms=app.config["COOLDOWN_MS"],
        )

    # A configured but unreachable database aborts startup (StoreUnavailable).
    if container.conn.connect():
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            ensure_indexes(container.conn.db)
    elif not app.config["DEBUG"] and not app.config["TESTING"]:
        logger.warning(
            "No MongoDB URI provided; starting with in-memory fallback. "
            "Set MONGO_URI or ATLAS_URL for persistent storage."
        )

    logger.info(
        "settings=%s store=%s cooldown=%sms",
        settings_module,
        "mongodb" if container.conn.is_connected() else "memory",
        app.config["COOLDOWN_MS"],
    )

    if bool(getattr(settings, "DAILY_RESET_ENABLED", False)):
        container.daily_reset.start()
        atexit.register(container.daily_reset.shutdown)

    app.extensions["access_log"] = container

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"ok": True, "message": "RFID Server running"})

    @app.route("/", endpoint="index")
    def index():
        return jsonify({"ok": True, "message": "RFID access log API - see /api/* endpoints"})

    register_users(app, container)
    register_logs(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return error("Not found", 404)

    @app.errorhandler(Exception)
    def unhandled(e):
        if isinstance(e, HTTPException):
            return error(e.description or e.name, e.code or 500)
        return internal_error(e)

    return app
