from __future__ import annotations

import pytest

from src.staffdesk.staffdesk.core.enums import LeaveStatus, Role
from tests.fakes import add_user, employee_payload, register_company, seed_lookups


def _login(app, username: str, password: str = "secret1"):
    client = app.test_client()
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def acme(container):
    admin = register_company(container)
    return admin, seed_lookups(container, admin)


def test_register_forces_admin_and_logs_once(client, container):
    resp = client.post(
        "/api/register",
        json={
            "username": "alice",
            "password": "secret1",
            "fullName": "Alice Admin",
            "email": "alice@acme.test",
            "role": "user",
        },
    )

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["role"] == "admin"
    assert "passwordHash" not in body
    assert container.repos.activity.actions() == ["User Registration"]
    assert client.get("/api/user").get_json()["username"] == "alice"


def test_register_validation_errors_are_listed(client):
    resp = client.post("/api/register", json={"username": "al", "password": "x"})

    assert resp.status_code == 400
    fields = {e["field"] for e in resp.get_json()["errors"]}
    assert {"username", "password", "fullName", "email"} <= fields


def test_unauthenticated_requests_get_401(client):
    resp = client.get("/api/employees")
    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Unauthorized"}


def test_wrong_password_is_rejected(app, container):
    register_company(container)
    resp = app.test_client().post("/api/login", json={"username": "alice", "password": "nope"})
    assert resp.status_code == 401


def test_hr_employee_with_unknown_department_is_rejected(app, container, acme):
    admin, lookups = acme
    add_user(container, admin, "harriet", Role.HR)
    hr = _login(app, "harriet")

    resp = hr.post("/api/departments", json={"name": "Finance"})
    assert resp.status_code == 201
    assert resp.get_json()["name"] == "Finance"

    resp = hr.post("/api/employees", json=employee_payload(lookups, departmentId=9999))
    assert resp.status_code == 400
    assert resp.get_json()["errors"][0]["field"] == "departmentId"
    assert container.repos.employees.rows == {}


def test_leave_ending_before_it_starts_is_rejected(app, container, acme):
    admin, lookups = acme
    employee = container.employee_service.create_employee(admin, employee_payload(lookups))
    client = _login(app, "alice")

    resp = client.post(
        "/api/leaves",
        json={
            "employeeId": employee.id,
            "leaveTypeId": lookups["leave_type"].id,
            "startDate": "2024-05-10",
            "endDate": "2024-05-08",
            "reason": "Trip",
        },
    )

    assert resp.status_code == 400
    assert resp.get_json()["errors"] == [
        {"field": "endDate", "message": "End date cannot be earlier than start date"}
    ]
    assert container.repos.leaves.rows == {}


def test_duplicate_attendance_is_a_conflict(app, container, acme):
    admin, lookups = acme
    employee = container.employee_service.create_employee(admin, employee_payload(lookups))
    client = _login(app, "alice")
    payload = {"employeeId": employee.id, "date": "2024-05-10", "status": "present"}

    assert client.post("/api/attendance", json=payload).status_code == 201
    resp = client.post("/api/attendance", json=payload)
    assert resp.status_code == 400
    assert "already exists" in resp.get_json()["message"]

    rows = client.get("/api/attendance?date=2024-05-10").get_json()
    assert len(rows) == 1
    assert rows[0]["date"] == "2024-05-10"


def test_plain_user_cannot_approve_own_leave(app, container, acme):
    admin, lookups = acme
    employee = container.employee_service.create_employee(
        admin, employee_payload(lookups, email="ursula@example.test")
    )
    add_user(container, admin, "ursula", Role.USER)
    user = _login(app, "ursula")

    resp = user.post(
        "/api/leaves",
        json={
            "employeeId": employee.id,
            "leaveTypeId": lookups["leave_type"].id,
            "startDate": "2024-05-10",
            "endDate": "2024-05-11",
            "reason": "Family",
        },
    )
    assert resp.status_code == 201
    leave = resp.get_json()
    assert leave["status"] == "pending"

    resp = user.put(f"/api/leaves/{leave['id']}", json={**leave, "status": "approved"})
    assert resp.status_code == 403
    assert container.repos.leaves.get_by_id(leave["id"]).status == LeaveStatus.PENDING


def test_other_company_rows_are_not_found(app, container, acme):
    admin, lookups = acme
    employee = container.employee_service.create_employee(admin, employee_payload(lookups))
    register_company(container, "gina", "Globex")
    other = _login(app, "gina")

    assert other.get(f"/api/employees/{employee.id}").status_code == 404
    assert other.get("/api/employees").get_json() == []


def test_dashboard_stats_shape(app, acme):
    client = _login(app, "alice")
    body = client.get("/api/dashboard/stats").get_json()
    assert set(body) == {"totalEmployees", "activeToday", "onLeaveToday", "pendingLeaveRequests"}


def test_logout_ends_session(app, acme):
    client = _login(app, "alice")
    assert client.post("/api/logout").status_code == 200
    assert client.get("/api/user").status_code == 401
