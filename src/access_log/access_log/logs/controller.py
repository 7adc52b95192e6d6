from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error, internal_error
from ..container import Container
from ..core.enums import ScanResult
from ..core.exceptions import InvalidInput, NotFound


def _scan_payload() -> dict:
    # RFID readers post either JSON or form-encoded bodies
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _as_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def register(app: Flask, container: Container) -> None:
    @app.route("/api/logs/scan", methods=["POST"], endpoint="scan")
    def scan():
        """Record a scan (time in or time out). No auth so the scanner can call it."""
        data = _scan_payload()
        badge_id = _as_text(data.get("userIdNumber"))
        scanner_id = _as_text(data.get("rfidScannerId"))
        if not badge_id or not scanner_id:
            return error("userIdNumber and rfidScannerId are required.", 400)

        try:
            outcome = container.scan_resolver.resolve_scan(badge_id, scanner_id)
        except InvalidInput as e:
            return error(str(e), 400)
        except Exception as e:
            return internal_error(e)

        status = 201 if outcome.result == ScanResult.SESSION_OPENED else 200
        return jsonify(outcome.to_dict()), status

    @app.route("/api/logs", methods=["GET"], endpoint="list_logs")
    def list_logs():
        try:
            logs = container.log_service.list_logs(
                badge_id=request.args.get("userIdNumber"),
                scanner_id=request.args.get("rfidScannerId"),
                time_from=request.args.get("from"),
                time_to=request.args.get("to"),
            )
        except InvalidInput as e:
            return error(str(e), 400)
        except Exception as e:
            return internal_error(e)
        return jsonify([log.to_dict() for log in logs])

    @app.route("/api/logs/<log_id>", methods=["GET"], endpoint="get_log")
    def get_log(log_id: str):
        try:
            log = container.log_service.get_log(log_id)
        except NotFound as e:
            return error(str(e), 404)
        except Exception as e:
            return internal_error(e)
        return jsonify(log.to_dict())
