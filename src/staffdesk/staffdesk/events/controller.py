from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_json, to_json_list
from ..container import Container
from ..web.guards import current_principal, json_body, login_required


def register(app: Flask, container: Container) -> None:
    service = container.event_service

    @app.route("/api/events", methods=["GET"], endpoint="list_events")
    @login_required
    def list_events():
        if request.args.get("upcoming") in ("1", "true"):
            return jsonify(to_json_list(service.list_upcoming(current_principal())))
        return jsonify(to_json_list(service.list_events(current_principal())))

    @app.route("/api/events/<int:event_id>", methods=["GET"], endpoint="get_event")
    @login_required
    def get_event(event_id: int):
        return jsonify(to_json(service.get_event(current_principal(), event_id)))

    @app.route("/api/events", methods=["POST"], endpoint="create_event")
    @login_required
    def create_event():
        return jsonify(to_json(service.create_event(current_principal(), json_body()))), 201

    @app.route("/api/events/<int:event_id>", methods=["PUT"], endpoint="update_event")
    @login_required
    def update_event(event_id: int):
        return jsonify(to_json(service.update_event(current_principal(), event_id, json_body())))

    @app.route("/api/events/<int:event_id>", methods=["DELETE"], endpoint="delete_event")
    @login_required
    def delete_event(event_id: int):
        service.delete_event(current_principal(), event_id)
        return "", 204
