from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def json_body() -> dict:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError("JSON object expected")
        return data

    @app.route("/api/accounts", methods=["GET"], endpoint="list_accounts")
    def list_accounts():
        accounts = container.account_service.list_accounts()
        return jsonify({"success": True, "accounts": [a.to_public_dict() for a in accounts]})

    @app.route("/api/accounts", methods=["POST"], endpoint="add_account")
    def add_account():
        data = json_body()
        account = container.account_service.add_account(
            email=data.get("email", ""),
            password=data.get("password", ""),
            code=data.get("code", ""),
        )
        return jsonify({"success": True, "account": account.to_public_dict()}), 201

    @app.route("/api/accounts/code/<code>", methods=["GET"], endpoint="get_account_by_code")
    def get_account_by_code(code: str):
        account = container.account_service.get_active_by_code(code)
        return jsonify({"success": True, "account": account.to_public_dict()})

    @app.route("/api/accounts/<int:account_id>", methods=["PATCH"], endpoint="update_account")
    def update_account(account_id: int):
        data = json_body()
        account = container.account_service.update_account(
            account_id,
            email=data.get("email"),
            password=data.get("password"),
            status=data.get("status"),
        )
        return jsonify({"success": True, "account": account.to_public_dict()})

    @app.route("/api/accounts/<int:account_id>", methods=["DELETE"], endpoint="remove_account")
    def remove_account(account_id: int):
        container.account_service.remove_account(account_id)
        return jsonify({"success": True})
