from __future__ import annotations

from flask import Flask, jsonify

from ..common.serialization import to_json, to_json_list
from ..container import Container
from ..employees.controller import employee_json
from ..web.guards import current_principal, login_required, query_int


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @login_required
    def dashboard_stats():
        return jsonify(to_json(service.stats(current_principal())))

    @app.route("/api/dashboard/department-distribution", methods=["GET"], endpoint="dashboard_departments")
    @login_required
    def dashboard_departments():
        return jsonify(to_json_list(service.department_distribution(current_principal())))

    @app.route("/api/dashboard/recent-employees", methods=["GET"], endpoint="dashboard_recent_employees")
    @login_required
    def dashboard_recent_employees():
        employees = service.recent_employees(current_principal(), query_int("limit"))
        return jsonify([employee_json(e) for e in employees])

    @app.route("/api/dashboard/activities", methods=["GET"], endpoint="dashboard_activities")
    @login_required
    def dashboard_activities():
        return jsonify(to_json_list(service.recent_activities(current_principal(), query_int("limit"))))

    @app.route("/api/dashboard/upcoming-events", methods=["GET"], endpoint="dashboard_upcoming_events")
    @login_required
    def dashboard_upcoming_events():
        return jsonify(to_json_list(service.upcoming_events(current_principal(), query_int("limit"))))
