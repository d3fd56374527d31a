from __future__ import annotations

from flask import Flask, jsonify

from ..common.serialization import to_json, to_json_list
from ..container import Container
from ..web.guards import current_principal, json_body, login_required
from .service import LookupService


def _register_lookup(app: Flask, path: str, name: str, service: LookupService) -> None:
    @app.route(path, methods=["GET"], endpoint=f"list_{name}")
    @login_required
    def list_items():
        return jsonify(to_json_list(service.list(current_principal())))

    @app.route(f"{path}/<int:item_id>", methods=["GET"], endpoint=f"get_{name}")
    @login_required
    def get_item(item_id: int):
        return jsonify(to_json(service.get(current_principal(), item_id)))

    @app.route(path, methods=["POST"], endpoint=f"create_{name}")
    @login_required
    def create_item():
        return jsonify(to_json(service.create(current_principal(), json_body()))), 201

    @app.route(f"{path}/<int:item_id>", methods=["PUT"], endpoint=f"update_{name}")
    @login_required
    def update_item(item_id: int):
        return jsonify(to_json(service.update(current_principal(), item_id, json_body())))

    @app.route(f"{path}/<int:item_id>", methods=["DELETE"], endpoint=f"delete_{name}")
    @login_required
    def delete_item(item_id: int):
        service.delete(current_principal(), item_id)
        return "", 204


def register(app: Flask, container: Container) -> None:
    _register_lookup(app, "/api/departments", "department", container.department_service)
    _register_lookup(app, "/api/designations", "designation", container.designation_service)
    _register_lookup(app, "/api/employee-types", "employee_type", container.employee_type_service)
    _register_lookup(app, "/api/shifts", "shift", container.shift_service)
    _register_lookup(app, "/api/leave-types", "leave_type", container.leave_type_service)
    _register_lookup(app, "/api/locations", "location", container.location_service)

    @app.route("/api/designations/department/<int:department_id>", methods=["GET"], endpoint="designations_by_department")
    @login_required
    def designations_by_department(department_id: int):
        items = container.designation_service.list_by_department(current_principal(), department_id)
        return jsonify(to_json_list(items))
