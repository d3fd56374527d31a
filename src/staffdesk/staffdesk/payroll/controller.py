from __future__ import annotations

from flask import Flask, jsonify

from ..common.serialization import to_json, to_json_list
from ..container import Container
from ..web.guards import current_principal, json_body, login_required, query_int


def register(app: Flask, container: Container) -> None:
    service = container.salary_service

    @app.route("/api/salaries", methods=["GET"], endpoint="list_salaries")
    @login_required
    def list_salaries():
        records = service.list_salaries(
            current_principal(),
            month=query_int("month"),
            year=query_int("year"),
            employee_id=query_int("employeeId"),
        )
        return jsonify(to_json_list(records))

    @app.route("/api/salaries/<int:salary_id>", methods=["GET"], endpoint="get_salary")
    @login_required
    def get_salary(salary_id: int):
        return jsonify(to_json(service.get_salary(current_principal(), salary_id)))

    @app.route("/api/salaries", methods=["POST"], endpoint="create_salary")
    @login_required
    def create_salary():
        return jsonify(to_json(service.create_salary(current_principal(), json_body()))), 201

    @app.route("/api/salaries/<int:salary_id>", methods=["PUT"], endpoint="update_salary")
    @login_required
    def update_salary(salary_id: int):
        return jsonify(to_json(service.update_salary(current_principal(), salary_id, json_body())))

    @app.route("/api/salaries/<int:salary_id>", methods=["DELETE"], endpoint="delete_salary")
    @login_required
    def delete_salary(salary_id: int):
        service.delete_salary(current_principal(), salary_id)
        return "", 204
