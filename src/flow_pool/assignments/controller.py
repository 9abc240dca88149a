from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    def json_body() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    @app.route("/api/users/<user_id>/assignment", methods=["GET"], endpoint="get_assignment")
    def get_assignment(user_id: str):
        code = container.assignment_service.get_current(user_id)
        return jsonify({"success": True, "user_id": user_id, "code": code})

    @app.route("/api/users/<user_id>/assignment", methods=["POST"], endpoint="assign_user")
    def assign_user(user_id: str):
        result = container.assignment_service.assign(user_id, json_body().get("code"))
        return jsonify(result.to_dict())

    @app.route("/api/users/<user_id>/assignment", methods=["DELETE"], endpoint="release_user")
    def release_user(user_id: str):
        released = container.assignment_service.release(user_id)
        return jsonify({"success": True, "released": released})

    @app.route("/api/assignments/by-identity", methods=["POST"], endpoint="assign_by_identity")
    def assign_by_identity():
        data = json_body()
        result = container.assignment_service.reassign_by_identity(data.get("email", ""), data.get("code", ""))
        payload = result.to_dict()
        payload["message"] = (
            "User already has this flow code assigned"
            if result.unchanged
            else f"Flow code {result.code} assigned successfully"
        )
        return jsonify(payload)
