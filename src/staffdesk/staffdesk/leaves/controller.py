from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_json
from ..common.validators import PayloadReader
from ..container import Container
from ..core.enums import LeaveStatus
from ..web.guards import current_principal, json_body, login_required, query_int


def leave_json(leave) -> dict:
    data = to_json(leave)
    data["days"] = leave.days
    return data


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @login_required
    def list_leaves():
        reader = PayloadReader(request.args)
        status = reader.choice("status", LeaveStatus, required=False)
        reader.raise_if_errors()
        leaves = service.list_leaves(current_principal(), status=status, employee_id=query_int("employeeId"))
        return jsonify([leave_json(item) for item in leaves])

    @app.route("/api/leaves/employee/<int:employee_id>", methods=["GET"], endpoint="leaves_by_employee")
    @login_required
    def leaves_by_employee(employee_id: int):
        return jsonify([leave_json(item) for item in service.list_for_employee(current_principal(), employee_id)])

    @app.route("/api/leaves/<int:leave_id>", methods=["GET"], endpoint="get_leave")
    @login_required
    def get_leave(leave_id: int):
        return jsonify(leave_json(service.get_leave(current_principal(), leave_id)))

    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    @login_required
    def create_leave():
        return jsonify(leave_json(service.create_leave(current_principal(), json_body()))), 201

    @app.route("/api/leaves/<int:leave_id>", methods=["PUT"], endpoint="update_leave")
    @login_required
    def update_leave(leave_id: int):
        return jsonify(leave_json(service.update_leave(current_principal(), leave_id, json_body())))

    @app.route("/api/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="approve_leave")
    @login_required
    def approve_leave(leave_id: int):
        return jsonify(leave_json(service.approve_leave(current_principal(), leave_id)))

    @app.route("/api/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="reject_leave")
    @login_required
    def reject_leave(leave_id: int):
        return jsonify(leave_json(service.reject_leave(current_principal(), leave_id)))

    @app.route("/api/leaves/<int:leave_id>", methods=["DELETE"], endpoint="delete_leave")
    @login_required
    def delete_leave(leave_id: int):
        service.delete_leave(current_principal(), leave_id)
        return "", 204
