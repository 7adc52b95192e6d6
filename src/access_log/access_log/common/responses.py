from __future__ import annotations

import logging

from flask import current_app, jsonify

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal server error"


def error(message: str, status: int):
    return jsonify({"error": message}), status


def internal_error(exc: BaseException):
    """500 response; exception text only when SHOW_ERROR_DETAILS is on."""
    logger.error("Unhandled error: %s", exc, exc_info=exc)
    if bool(current_app.config.get("SHOW_ERROR_DETAILS", False)):
        message = str(exc) or GENERIC_ERROR
    else:
        message = GENERIC_ERROR
    return error(message, 500)
