from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_json, to_json_list
from ..common.validators import PayloadReader
from ..container import Container
from ..web.guards import current_principal, json_body, login_required, query_int

_RENAMES = {"work_date": "date"}


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @login_required
    def list_attendance():
        reader = PayloadReader(request.args)
        work_date = reader.date("date", required=False)
        reader.raise_if_errors()
        records = service.list_attendance(
            current_principal(), work_date=work_date, employee_id=query_int("employeeId")
        )
        return jsonify(to_json_list(records, renames=_RENAMES))

    @app.route("/api/attendance/employee/<int:employee_id>", methods=["GET"], endpoint="attendance_by_employee")
    @login_required
    def attendance_by_employee(employee_id: int):
        return jsonify(to_json_list(service.list_for_employee(current_principal(), employee_id), renames=_RENAMES))

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="get_attendance")
    @login_required
    def get_attendance(attendance_id: int):
        return jsonify(to_json(service.get_attendance(current_principal(), attendance_id), renames=_RENAMES))

    @app.route("/api/attendance", methods=["POST"], endpoint="create_attendance")
    @login_required
    def create_attendance():
        record = service.create_attendance(current_principal(), json_body())
        return jsonify(to_json(record, renames=_RENAMES)), 201

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="update_attendance")
    @login_required
    def update_attendance(attendance_id: int):
        record = service.update_attendance(current_principal(), attendance_id, json_body())
        return jsonify(to_json(record, renames=_RENAMES))

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="delete_attendance")
    @login_required
    def delete_attendance(attendance_id: int):
        service.delete_attendance(current_principal(), attendance_id)
        return "", 204
