from __future__ import annotations

import logging

import pytest

from src.staffdesk.staffdesk.core.enums import Role
from src.staffdesk.staffdesk.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidReferenceError,
    NotFoundError,
)
from tests.fakes import add_user, employee_payload, register_company, seed_lookups


@pytest.fixture
def acme(container):
    admin = register_company(container, "alice", "Acme")
    return admin, seed_lookups(container, admin)


def test_hr_creates_employee(container, acme):
    admin, lookups = acme
    hr = add_user(container, admin, "henry", Role.HR)

    employee = container.employee_service.create_employee(hr, employee_payload(lookups))

    assert employee.full_name == "Bob Builder"
    assert employee.company_id == admin.company_id
    details = container.repos.activity.list_recent(admin.company_id, 1)[0].details
    assert "Engineering" in details


def test_plain_user_can_read_but_not_create(container, acme):
    admin, lookups = acme
    user = add_user(container, admin, "ursula", Role.USER)
    container.employee_service.create_employee(admin, employee_payload(lookups))

    assert len(container.employee_service.list_employees(user)) == 1
    with pytest.raises(AuthorizationError):
        container.employee_service.create_employee(user, employee_payload(lookups, employeeId="E-2"))


def test_foreign_department_is_a_reference_error(container, acme):
    admin, lookups = acme
    globex = register_company(container, "gina", "Globex")
    foreign = container.department_service.create(globex, {"name": "Sales"})

    with pytest.raises(InvalidReferenceError) as exc:
        container.employee_service.create_employee(admin, employee_payload(lookups, departmentId=foreign.id))
    assert exc.value.field == "departmentId"
    assert not container.repos.employees.rows


def test_designation_must_belong_to_department(container, acme):
    admin, lookups = acme
    other = container.department_service.create(admin, {"name": "Finance"})

    with pytest.raises(InvalidReferenceError) as exc:
        container.employee_service.create_employee(admin, employee_payload(lookups, departmentId=other.id))
    assert exc.value.field == "designationId"


def test_employee_code_and_email_are_unique_per_company(container, acme):
    admin, lookups = acme
    container.employee_service.create_employee(admin, employee_payload(lookups))

    with pytest.raises(ConflictError):
        container.employee_service.create_employee(admin, employee_payload(lookups, email="other@example.test"))
    with pytest.raises(ConflictError):
        container.employee_service.create_employee(admin, employee_payload(lookups, employeeId="E-2"))


def test_update_is_full_replace(container, acme):
    admin, lookups = acme
    employee = container.employee_service.create_employee(admin, employee_payload(lookups, phone="123"))

    updated = container.employee_service.update_employee(
        admin, employee.id, employee_payload(lookups, firstName="Robert")
    )

    assert updated.first_name == "Robert"
    assert updated.phone is None
    assert updated.created_at == employee.created_at


def test_find_by_email(container, acme):
    admin, lookups = acme
    employee = container.employee_service.create_employee(admin, employee_payload(lookups))

    assert container.employee_service.find_by_email(admin, "bob@example.test").id == employee.id
    with pytest.raises(NotFoundError):
        container.employee_service.find_by_email(admin, "nobody@example.test")


def test_employee_with_attendance_cannot_be_deleted(container, acme):
    admin, lookups = acme
    employee = container.employee_service.create_employee(admin, employee_payload(lookups))
    container.attendance_service.create_attendance(
        admin, {"employeeId": employee.id, "date": "2024-01-10", "status": "present"}
    )

    with pytest.raises(ConflictError, match="attendance"):
        container.employee_service.delete_employee(admin, employee.id)
    assert container.repos.employees.get_by_id(employee.id) is not None


def test_delete_logs_unknown_department_when_lookup_fails(container, acme, monkeypatch, caplog):
    admin, lookups = acme
    employee = container.employee_service.create_employee(admin, employee_payload(lookups))

    def boom(_id):
        raise RuntimeError("db down")

    monkeypatch.setattr(container.repos.departments, "get_by_id", boom)
    with caplog.at_level(logging.WARNING):
        container.employee_service.delete_employee(admin, employee.id)

    entry = container.repos.activity.list_recent(admin.company_id, 1)[0]
    assert entry.action == "Employee Deleted"
    assert '"Unknown"' in entry.details
    assert "lookup failed" in caplog.text


def test_deleting_employee_clears_org_chart_link(container, acme):
    admin, lookups = acme
    employee = container.employee_service.create_employee(admin, employee_payload(lookups))
    node = container.org_chart_service.create_node(admin, {"name": "Lead", "employeeId": employee.id})

    container.employee_service.delete_employee(admin, employee.id)

    kept = container.repos.org_chart.get_by_id(node.id)
    assert kept.name == "Lead"
    assert kept.employee_id is None
    assert container.repos.activity.actions(admin.company_id)[-1] == "Employee Deleted"
