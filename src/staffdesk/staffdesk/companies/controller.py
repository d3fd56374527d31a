from __future__ import annotations

from flask import Flask, jsonify

from ..common.serialization import to_json
from ..container import Container
from ..web.guards import current_principal, json_body, login_required


def register(app: Flask, container: Container) -> None:
    service = container.company_service

    @app.route("/api/company", methods=["GET"], endpoint="get_company")
    @login_required
    def get_company():
        return jsonify(to_json(service.get_company(current_principal())))

    @app.route("/api/company", methods=["PUT"], endpoint="update_company")
    @login_required
    def update_company():
        return jsonify(to_json(service.update_company(current_principal(), json_body())))
