from __future__ import annotations

import pytest

from src.staffdesk.staffdesk.core.enums import Role
from src.staffdesk.staffdesk.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from tests.fakes import add_user, employee_payload, register_company, seed_lookups


def test_hr_creates_department_and_it_is_logged(container):
    admin = register_company(container)
    hr = add_user(container, admin, "henry", Role.HR)

    dept = container.department_service.create(hr, {"name": "Engineering", "companyId": 999})

    assert dept.company_id == admin.company_id
    assert container.repos.activity.actions(admin.company_id)[-1] == "Department Created"


def test_manager_cannot_create_lookups(container):
    admin = register_company(container)
    manager = add_user(container, admin, "mia", Role.MANAGER)

    with pytest.raises(AuthorizationError):
        container.department_service.create(manager, {"name": "Engineering"})
    assert not container.repos.departments.rows


def test_hr_cannot_delete_lookups(container):
    admin = register_company(container)
    hr = add_user(container, admin, "henry", Role.HR)
    dept = container.department_service.create(admin, {"name": "Ops"})

    with pytest.raises(AuthorizationError):
        container.department_service.delete(hr, dept.id)


def test_duplicate_name_in_company_is_rejected(container):
    admin = register_company(container)
    container.department_service.create(admin, {"name": "Engineering"})

    with pytest.raises(ConflictError):
        container.department_service.create(admin, {"name": "engineering"})


def test_same_name_allowed_in_another_company(container):
    acme = register_company(container, "alice", "Acme")
    globex = register_company(container, "gina", "Globex")
    container.department_service.create(acme, {"name": "Engineering"})

    assert container.department_service.create(globex, {"name": "Engineering"}).company_id == globex.company_id


def test_list_is_scoped_to_company(container):
    acme = register_company(container, "alice", "Acme")
    globex = register_company(container, "gina", "Globex")
    container.department_service.create(acme, {"name": "Engineering"})

    assert container.department_service.list(globex) == []


def test_cannot_read_update_or_delete_foreign_department(container):
    acme = register_company(container, "alice", "Acme")
    globex = register_company(container, "gina", "Globex")
    dept = container.department_service.create(acme, {"name": "Engineering"})

    with pytest.raises(NotFoundError):
        container.department_service.get(globex, dept.id)
    with pytest.raises(NotFoundError):
        container.department_service.update(globex, dept.id, {"name": "Hacked"})
    with pytest.raises(NotFoundError):
        container.department_service.delete(globex, dept.id)
    assert container.repos.departments.get_by_id(dept.id).name == "Engineering"


def test_designation_needs_department_of_same_company(container):
    acme = register_company(container, "alice", "Acme")
    globex = register_company(container, "gina", "Globex")
    foreign = container.department_service.create(globex, {"name": "Sales"})

    with pytest.raises(InvalidReferenceError) as exc:
        container.designation_service.create(acme, {"name": "Rep", "departmentId": foreign.id})
    assert exc.value.field == "departmentId"
    assert not container.repos.designations.rows


def test_department_with_employees_cannot_be_deleted(container):
    admin = register_company(container)
    lookups = seed_lookups(container, admin)
    container.employee_service.create_employee(admin, employee_payload(lookups))

    with pytest.raises(ConflictError, match="employees"):
        container.department_service.delete(admin, lookups["department"].id)
    with pytest.raises(ConflictError):
        container.location_service.delete(admin, lookups["location"].id)
    with pytest.raises(ConflictError):
        container.shift_service.delete(admin, lookups["shift"].id)


def test_department_with_designations_cannot_be_deleted(container):
    admin = register_company(container)
    dept = container.department_service.create(admin, {"name": "Ops"})
    container.designation_service.create(admin, {"name": "Lead", "departmentId": dept.id})

    with pytest.raises(ConflictError, match="designations"):
        container.department_service.delete(admin, dept.id)


def test_leave_type_in_use_cannot_be_deleted(container):
    admin = register_company(container)
    lookups = seed_lookups(container, admin)
    employee = container.employee_service.create_employee(
        admin, employee_payload(lookups, email="alice@acme.test")
    )
    container.leave_service.create_leave(
        admin,
        {
            "employeeId": employee.id,
            "leaveTypeId": lookups["leave_type"].id,
            "startDate": "2024-02-01",
            "endDate": "2024-02-02",
            "reason": "Trip",
        },
    )

    with pytest.raises(ConflictError):
        container.leave_type_service.delete(admin, lookups["leave_type"].id)


def test_unused_department_is_deleted_and_logged(container):
    admin = register_company(container)
    dept = container.department_service.create(admin, {"name": "Ops"})

    container.department_service.delete(admin, dept.id)

    assert container.repos.departments.get_by_id(dept.id) is None
    assert container.repos.activity.actions(admin.company_id)[-1] == "Department Deleted"


def test_shift_times_are_validated(container):
    admin = register_company(container)
    with pytest.raises(ValidationError) as exc:
        container.shift_service.create(admin, {"name": "Night", "startTime": "25:00"})
    assert {e["field"] for e in exc.value.errors} == {"startTime", "endTime"}


def test_leave_type_allowed_days_cannot_be_negative(container):
    admin = register_company(container)
    with pytest.raises(ValidationError):
        container.leave_type_service.create(admin, {"name": "Sick", "allowedDays": -1})
