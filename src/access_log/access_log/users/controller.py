from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error, internal_error
from ..container import Container
from ..core.exceptions import InvalidInput, NotFound


def _json_object() -> dict:
    # Non-object bodies (arrays, scalars) are treated as empty
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register(app: Flask, container: Container) -> None:
    # Authentication is disabled in this build; every route is public.

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    def list_users():
        try:
            users = container.user_service.list_users()
        except Exception as e:
            return internal_error(e)
        return jsonify([u.to_dict() for u in users])

    @app.route("/api/users/<user_id>", methods=["GET"], endpoint="get_user")
    def get_user(user_id: str):
        try:
            user = container.user_service.get_user(user_id)
        except NotFound as e:
            return error(str(e), 404)
        except Exception as e:
            return internal_error(e)
        return jsonify(user.to_dict())

    @app.route("/api/users/by-id/<id_number>", methods=["GET"], endpoint="get_user_by_badge")
    def get_user_by_badge(id_number: str):
        """Lookup by badge identifier (RFID lookup)."""
        try:
            user = container.user_service.get_by_badge(id_number)
        except NotFound as e:
            return error(str(e), 404)
        except Exception as e:
            return internal_error(e)
        return jsonify(user.to_dict())

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    def create_user():
        data = _json_object()
        try:
            user = container.user_service.create_user(
                name=data.get("name"),
                id_number=data.get("idNumber"),
                role=data.get("role"),
            )
        except InvalidInput as e:
            return error(str(e), 400)
        except Exception as e:
            return internal_error(e)
        return jsonify(user.to_dict()), 201

    @app.route("/api/users/<user_id>", methods=["PATCH"], endpoint="update_user")
    def update_user(user_id: str):
        data = _json_object()
        try:
            user = container.user_service.update_user(
                user_id,
                name=data.get("name"),
                role=data.get("role"),
                password=data.get("password"),
            )
        except InvalidInput as e:
            return error(str(e), 400)
        except NotFound as e:
            return error(str(e), 404)
        except Exception as e:
            return internal_error(e)
        return jsonify(user.to_dict())

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    def delete_user(user_id: str):
        try:
            container.user_service.delete_user(user_id)
        except NotFound as e:
            return error(str(e), 404)
        except Exception as e:
            return internal_error(e)
        return jsonify({"message": "User deleted."})
