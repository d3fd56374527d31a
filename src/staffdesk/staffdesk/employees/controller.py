from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_json
from ..container import Container
from ..web.guards import current_principal, json_body, login_required

_RENAMES = {"employee_code": "employeeId"}


def employee_json(employee) -> dict:
    data = to_json(employee, renames=_RENAMES)
    data["fullName"] = employee.full_name
    return data


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        email = request.args.get("email")
        if email:
            return jsonify(employee_json(service.find_by_email(current_principal(), email)))
        return jsonify([employee_json(e) for e in service.list_employees(current_principal())])

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: int):
        return jsonify(employee_json(service.get_employee(current_principal(), employee_id)))

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @login_required
    def create_employee():
        return jsonify(employee_json(service.create_employee(current_principal(), json_body()))), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    @login_required
    def update_employee(employee_id: int):
        return jsonify(employee_json(service.update_employee(current_principal(), employee_id, json_body())))

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @login_required
    def delete_employee(employee_id: int):
        service.delete_employee(current_principal(), employee_id)
        return "", 204
