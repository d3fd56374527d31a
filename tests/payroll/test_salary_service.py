from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.staffdesk.staffdesk.core.enums import PaymentStatus, Role
from src.staffdesk.staffdesk.core.exceptions import AuthorizationError, ConflictError, ValidationError
from src.staffdesk.staffdesk.payroll import service as salary_module
from tests.fakes import add_user, employee_payload, register_company, seed_lookups


@pytest.fixture
def setup(container):
    admin = register_company(container)
    lookups = seed_lookups(container, admin)
    employee = container.employee_service.create_employee(admin, employee_payload(lookups))
    return admin, employee


def _payload(employee, **overrides):
    payload = {
        "employeeId": employee.id,
        "month": 1,
        "year": 2024,
        "basicSalary": 3000,
        "houseRentAllowance": 500,
        "providentFund": 200,
        "incomeTax": 100,
    }
    payload.update(overrides)
    return payload


def test_net_salary_is_computed(container, setup):
    admin, employee = setup
    record = container.salary_service.create_salary(admin, _payload(employee))

    assert record.net_salary == Decimal("3200.00")
    assert record.payment_status == PaymentStatus.PENDING
    assert container.repos.activity.actions(admin.company_id)[-1] == "Salary Created"


def test_client_net_within_tolerance_is_replaced(container, setup):
    admin, employee = setup
    record = container.salary_service.create_salary(admin, _payload(employee, netSalary="3200.50"))
    assert record.net_salary == Decimal("3200.00")


def test_client_net_mismatch_rejected(container, setup):
    admin, employee = setup
    with pytest.raises(ValidationError) as exc:
        container.salary_service.create_salary(admin, _payload(employee, netSalary=9999))
    assert exc.value.errors[0]["field"] == "netSalary"


def test_duplicate_period_conflicts(container, setup):
    admin, employee = setup
    container.salary_service.create_salary(admin, _payload(employee))

    with pytest.raises(ConflictError):
        container.salary_service.create_salary(admin, _payload(employee, basicSalary=4000))


def test_month_out_of_range(container, setup):
    admin, employee = setup
    with pytest.raises(ValidationError) as exc:
        container.salary_service.create_salary(admin, _payload(employee, month=13))
    assert exc.value.errors[0]["field"] == "month"


def test_salary_is_hr_only(container, setup):
    admin, employee = setup
    manager = add_user(container, admin, "mia", Role.MANAGER)
    hr = add_user(container, admin, "henry", Role.HR)
    record = container.salary_service.create_salary(hr, _payload(employee))

    with pytest.raises(AuthorizationError):
        container.salary_service.list_salaries(manager)
    with pytest.raises(AuthorizationError):
        container.salary_service.delete_salary(hr, record.id)


def test_paid_without_date_gets_today(container, setup, monkeypatch):
    admin, employee = setup
    monkeypatch.setattr(salary_module, "today_local", lambda: date(2024, 2, 1))

    record = container.salary_service.create_salary(admin, _payload(employee, paymentStatus="paid"))
    assert record.payment_date == date(2024, 2, 1)


def test_filters(container, setup):
    admin, employee = setup
    container.salary_service.create_salary(admin, _payload(employee, month=1))
    container.salary_service.create_salary(admin, _payload(employee, month=2))

    assert [r.month for r in container.salary_service.list_salaries(admin, month=2, year=2024)] == [2]
