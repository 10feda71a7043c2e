from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_endpoint
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/balances/<identity>", methods=["GET"], endpoint="balance_of")
    @json_endpoint
    def balance_of(identity: str):
        return jsonify({"identity": identity, "balance": str(container.balance_service.balance_of(identity))})
